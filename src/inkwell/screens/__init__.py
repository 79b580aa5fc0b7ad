"""Inkwell TUI screens."""

from .main import LibraryScreen
from .about import AboutScreen
from .book_detail import BookDetailScreen
from .quotes import QuotesScreen
from .reader import ReaderScreen
from .stats import StatsScreen

__all__ = [
    "LibraryScreen",
    "AboutScreen",
    "BookDetailScreen",
    "QuotesScreen",
    "ReaderScreen",
    "StatsScreen",
]
