"""
User management infrastructure: SQLAlchemy models and relation maps.
"""
