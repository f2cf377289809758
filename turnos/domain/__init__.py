"""Domain types and rules."""
