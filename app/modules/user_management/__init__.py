# 📄 File: app/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# The accounts part of the menu service: who people are, how they sign in,
# and whether they are an admin or a regular user.
# 🧪 Purpose (Technical Summary):
# User management module: roles, users and authentication (signup, signin,
# federated login, bearer credential guard).
# 🔗 Dependencies:
# - app.shared (config, core, database)
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (route registration)
# - app.modules.catalog, app.modules.subscriptions, app.modules.orders (user references)
