"""Xendit payment provider for Medusa-style commerce backends."""

__version__ = "0.1.0"
