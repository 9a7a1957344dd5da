"""Dashboard aggregation."""
