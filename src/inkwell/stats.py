"""Derived views over the book collection.

Everything here is a pure function of the books passed in: nothing is
mutated or persisted.
"""

import math
from dataclasses import dataclass
from typing import Iterable

from .models import (
    STATUS_COMPLETED,
    STATUS_READING,
    STATUS_TO_READ,
    Book,
)

ALL = "all"

BOOKS_TARGET = 20
PAGES_TARGET = 5000
GENRES_TARGET = 10


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


@dataclass
class Statistics:
    """Aggregate figures over the whole library.

    Attributes
    ----------
    books_read : int
        Number of completed books.
    pages_read : int
        Total pages of completed books.
    total_time_hours : int
        Reading time over all books, rounded to whole hours.
    average_rating : float
        Mean rating of rated completed books, to one decimal (0 if none).
    currently_reading : int
        Number of books with status ``reading``.
    to_read : int
        Number of books with status ``to-read``.
    """

    books_read: int = 0
    pages_read: int = 0
    total_time_hours: int = 0
    average_rating: float = 0.0
    currently_reading: int = 0
    to_read: int = 0


@dataclass
class GenreProgress:
    genre: str
    completed: int
    total: int

    @property
    def percentage(self) -> float:
        return self.completed / self.total * 100 if self.total else 0.0


@dataclass
class Challenge:
    title: str
    current: int
    target: int

    @property
    def percentage(self) -> int:
        return int(_round_half_up(self.current / self.target * 100))

    @property
    def achieved(self) -> bool:
        return self.current >= self.target


def compute_statistics(books: Iterable[Book]) -> Statistics:
    """Compute aggregate statistics over *books*."""
    books = list(books)
    completed = [b for b in books if b.status == STATUS_COMPLETED]
    ratings = [b.rating for b in completed if b.rating is not None]
    total_minutes = sum(b.time_spent_minutes for b in books)
    average = sum(ratings) / len(ratings) if ratings else 0.0
    return Statistics(
        books_read=len(completed),
        pages_read=sum(b.pages for b in completed),
        total_time_hours=int(_round_half_up(total_minutes / 60)),
        average_rating=_round_half_up(average, 1),
        currently_reading=sum(1 for b in books if b.status == STATUS_READING),
        to_read=sum(1 for b in books if b.status == STATUS_TO_READ),
    )


def book_matches(book: Book, search: str = "", status: str = ALL, genre: str = ALL) -> bool:
    """Return whether *book* passes the search, status and genre filters."""
    needle = search.lower()
    if needle and needle not in book.title.lower() and needle not in book.author.lower():
        return False
    if status != ALL and book.status != status:
        return False
    if genre != ALL and book.genre != genre:
        return False
    return True


def filter_books(
    books: Iterable[Book], search: str = "", status: str = ALL, genre: str = ALL
) -> list[Book]:
    """Return the books matching all filters, in their original order.

    Parameters
    ----------
    books : iterable of Book
        Books to filter.
    search : str, optional
        Case-insensitive substring matched against title or author. Empty
        matches everything.
    status : str, optional
        Required status, or ``"all"``.
    genre : str, optional
        Required genre, or ``"all"``.
    """
    return [b for b in books if book_matches(b, search or "", status, genre)]


def unique_genres(books: Iterable[Book]) -> list[str]:
    """Return distinct genres in order of first appearance."""
    return list(dict.fromkeys(b.genre for b in books))


def genre_progress(books: Iterable[Book]) -> list[GenreProgress]:
    """Return completed/total counts per genre, in first-appearance order."""
    books = list(books)
    progress = []
    for genre in unique_genres(books):
        in_genre = [b for b in books if b.genre == genre]
        done = sum(1 for b in in_genre if b.status == STATUS_COMPLETED)
        progress.append(GenreProgress(genre, done, len(in_genre)))
    return progress


def reading_challenges(stats: Statistics, genre_count: int) -> list[Challenge]:
    """Return progress toward the standing reading challenges."""
    return [
        Challenge(f"Read {BOOKS_TARGET} books", stats.books_read, BOOKS_TARGET),
        Challenge(f"Read {PAGES_TARGET} pages", stats.pages_read, PAGES_TARGET),
        Challenge(f"Explore {GENRES_TARGET} different genres", genre_count, GENRES_TARGET),
    ]


def format_time(seconds: int) -> str:
    """Format seconds as ``MM:SS``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def format_duration(minutes: int) -> str:
    """Format minutes as ``2h 5m``, or ``45m`` under an hour."""
    hours, mins = divmod(max(0, int(minutes)), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"
