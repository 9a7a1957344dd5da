# 📄 File: app/modules/catalog/__init__.py
# 🧭 Purpose (Layman Explanation):
# The menu itself: a person's businesses, the chat contact each business shows,
# and the categories and items on each menu.
# 🧪 Purpose (Technical Summary):
# Catalog module: MessagingContact, Business, Category and Item with ownership
# resolved through the owning Business.
# 🔗 Dependencies:
# - app.shared (core, database, events)
# - app.modules.user_management (users, auth guard)
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (route registration)
# - app.modules.orders, app.modules.dashboard (business and item references)
