"""Catalog business rules."""
