"""Superapp backend: plugin composition for the host runtime."""

__version__ = "0.1.0"
