"""
User management domain layer: services holding the business rules.
"""
