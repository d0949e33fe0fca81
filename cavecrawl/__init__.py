"""A top-down cave crawler: generated cave levels, keys, exits, fireballs and enemies."""

__version__ = "0.1.0"

__all__ = ["__version__"]