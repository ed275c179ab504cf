"""localstore — cart, library catalog and login exercises over a local key-value store."""

__version__ = "0.3.0"
