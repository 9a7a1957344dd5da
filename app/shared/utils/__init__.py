# 📄 File: app/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# A collection of helpful tools other parts of the app use for common tasks like
# logging, building list queries and deriving slugs.

# 🧪 Purpose (Technical Summary):
# Utilities package: structured logging, the list Query Builder and general helpers.

# 🔗 Dependencies:
# - logging: Structured logging utilities
# - query: Pagination, sorting and search
# - helpers: General purpose helper functions

# 🔄 Connected Modules / Calls From:
# Used by: All application modules
