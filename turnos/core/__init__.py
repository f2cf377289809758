"""Core application wiring."""
