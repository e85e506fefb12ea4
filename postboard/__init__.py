"""postboard: authenticated short-post backend."""

__version__ = "0.1.0"
