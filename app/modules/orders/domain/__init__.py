"""Order business rules."""
