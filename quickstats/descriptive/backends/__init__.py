"""Compute backends for descriptive statistics."""
