"""Inkwell TUI widgets."""
