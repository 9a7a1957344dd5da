# 📄 File: app/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the menu service how to connect to its database,
# how to sign login tokens, and how to adjust its behavior per environment.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization exporting the cached settings factory.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - All modules requiring configuration

"""
Configuration Management Package

Handles environment-based settings for the store connection,
credential signing, pagination defaults and bootstrap accounts.
"""

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
