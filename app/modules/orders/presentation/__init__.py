"""Order HTTP routes and request schemas."""
