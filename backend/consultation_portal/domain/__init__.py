"""Framework-free booking rules."""
