"""Pure domain model for the activity lock: no I/O, no frameworks."""
