"""Catalog persistence: ORM models and relationship expansion maps."""
