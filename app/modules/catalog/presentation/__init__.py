"""Catalog HTTP routes and request schemas."""
