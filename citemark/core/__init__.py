"""Core citation annotation domain."""
