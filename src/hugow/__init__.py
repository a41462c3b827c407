"""Hugo content-management helper."""

__version__ = "0.3.0"
