"""
Infrastructure layer package for the Menu Management API.
Provides database connections, relationship expansion and the real-time channel.
"""
