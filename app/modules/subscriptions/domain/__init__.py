"""Subscription business rules."""
