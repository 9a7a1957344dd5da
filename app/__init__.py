# 📄 File: app/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this 'app' folder holds the menu management service and records
# its name and version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version and package metadata.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - app.main (application entry point)

"""
Menu Management API

A multi-tenant backend where businesses publish menus (categories and items),
receive orders, manage messaging contacts and hold subscription plans.
"""

__version__ = "1.0.0"
__title__ = "Menu Management API"
__description__ = "Multi-tenant menu management backend"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
