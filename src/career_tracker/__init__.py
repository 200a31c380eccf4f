"""Local-first focus tracking and career progress statistics."""

__version__ = "0.1.0"
