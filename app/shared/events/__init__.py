# 📄 File: app/shared/events/__init__.py

# 🧭 Purpose (Layman Explanation):
# Sets up the notification system that announces changes (new items, updated orders)
# to everyone watching the menu in real time.

# 🧪 Purpose (Technical Summary):
# Event notification package: the EventNotifier capability and its implementations.

# 🔗 Dependencies:
# - notifier: Event notifier protocol and implementations

# 🔄 Connected Modules / Calls From:
# Used by: All domain services for publishing mutation events
