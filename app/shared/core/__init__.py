"""
Core utilities package for the Menu Management API.
Provides security, exceptions, permissions, response shaping and FastAPI dependencies.
"""
