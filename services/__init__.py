"""Activity lock services."""
