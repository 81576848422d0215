"""Derivations: allocation, key derivation and capability parsing."""
