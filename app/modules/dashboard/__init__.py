# 📄 File: app/modules/dashboard/__init__.py
# 🧭 Purpose (Layman Explanation):
# The overview screen: how many people, businesses, categories, items and
# orders there are, either overall or for one person.
# 🧪 Purpose (Technical Summary):
# Dashboard module: read-only aggregate counts across the other modules.
# 🔗 Dependencies:
# - app.modules.user_management, app.modules.catalog, app.modules.orders (models)
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted at /dashboard)
