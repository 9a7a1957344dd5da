"""Subscription HTTP routes and request schemas."""
