"""Dashboard HTTP routes."""
