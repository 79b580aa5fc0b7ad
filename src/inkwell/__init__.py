"""Inkwell - a personal reading companion."""

__version__ = "0.1.0"
