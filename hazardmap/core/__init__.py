"""Settings and lifecycle rules."""
