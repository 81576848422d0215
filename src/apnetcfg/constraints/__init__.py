"""Constraint checks run before any document is written."""
