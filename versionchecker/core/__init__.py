"""Version record and lookup."""
