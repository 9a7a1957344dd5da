# 📄 File: app/modules/orders/__init__.py
# 🧭 Purpose (Layman Explanation):
# Orders that buyers place with a business, listing what they bought and what it cost.
# 🧪 Purpose (Technical Summary):
# Orders module: Order documents with embedded order lines and totals computed
# once at creation; access is owner-or-admin through the Business.
# 🔗 Dependencies:
# - app.shared (core, database, events)
# - app.modules.catalog (businesses, items)
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (route registration)
# - app.modules.dashboard (order counts)
