"""Supplements: data read from the host (iw, ip) and daemon reloads."""
