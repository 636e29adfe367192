"""Shared helpers used across game modules."""
