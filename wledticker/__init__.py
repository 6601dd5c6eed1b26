"""Scrolling text ticker for WLED pixel matrices."""

__version__ = "0.1.0"
