"""
User management presentation layer: HTTP routes, schemas and auth dependencies.
"""
