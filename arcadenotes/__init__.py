"""Small arcade games and effect demos built on pygame."""

__version__ = "0.1.0"