"""Background execution core of the shop backend."""

__version__ = "0.1.0"
