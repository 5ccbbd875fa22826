"""blogsite - typed site configuration and plugin host for the blog."""

__version__ = "1.0.0"
