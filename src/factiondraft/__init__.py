"""Private faction draft server."""

__version__ = "0.1.0"
