"""Rabin square-root XOR transform."""

__version__ = "0.1.0"
