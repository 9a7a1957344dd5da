# 📄 File: app/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing common tools
# that every part of the menu service uses, like database access and security.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for infrastructure and cross-cutting concerns used
# by every resource module.
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Database infrastructure and the generic repository
- Security, authentication and authorization policy
- Real-time event notification
- Query building, slugs and logging utilities
"""

__all__ = []
