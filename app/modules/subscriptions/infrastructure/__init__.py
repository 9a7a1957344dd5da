"""Subscription persistence."""
