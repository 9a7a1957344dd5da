# 📄 File: app/modules/subscriptions/__init__.py
# 🧭 Purpose (Layman Explanation):
# The plans people can sign up for, and which plan each person is on right now.
# 🧪 Purpose (Technical Summary):
# Subscriptions module: SubscriptionPlan catalogue (admin-managed) and
# UserSubscriptionPlan with derived end dates and one active plan per user.
# 🔗 Dependencies:
# - app.shared (core, database, events)
# - app.modules.user_management (users, auth guard)
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (route registration)
