# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation): 
# Marks the api folder as a Python package holding the web-facing parts of the menu service.
# 🧪 Purpose (Technical Summary): 
# Package initialization for the API layer (versioned routers and middleware).
# 🔗 Dependencies: 
# None (package initialization)
# 🔄 Connected Modules / Calls From: 
# app.main.py

"""
Menu Management API Package

Structure:
    api/
    ├── __init__.py          # This file
    ├── middleware/          # API middleware components
    │   ├── logging.py
    │   └── error_handling.py
    └── v1/                  # API version 1
        ├── __init__.py
        ├── router.py        # Main v1 router
        ├── health.py        # Health check endpoints
        └── realtime.py      # WebSocket channel
"""

CURRENT_VERSION = "v1"
