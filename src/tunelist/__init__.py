"""Tunelist - track and playlist management API."""

__version__ = "0.1.0"
