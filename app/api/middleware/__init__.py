"""
HTTP middleware for the Menu Management API.

Registration order in app.main (outermost first):
1. RequestLoggingMiddleware: request id, access log
2. ErrorHandlingMiddleware: generic 500 fallback
"""
