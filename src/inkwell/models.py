"""Data models for the Inkwell reading companion.

Defines the ``Book``, ``Quote`` and ``ReadingSession`` records kept in the
library, plus the draft types handed to the add operations.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

STATUS_TO_READ = "to-read"
STATUS_READING = "reading"
STATUS_COMPLETED = "completed"
STATUS_PAUSED = "paused"

BOOK_STATUSES = (STATUS_TO_READ, STATUS_READING, STATUS_COMPLETED, STATUS_PAUSED)

DEFAULT_GENRE = "Uncategorized"
UNKNOWN_BOOK = "Unknown Book"


def clean_tags(tags) -> list[str]:
    """Strip tags and drop blanks and duplicates, keeping first occurrence."""
    seen = []
    for tag in tags or []:
        tag = str(tag).strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


@dataclass
class Book:
    """A book in the reading library.

    Attributes
    ----------
    id : int
        Unique, immutable identifier within the library.
    title : str
        Main title of the book.
    author : str
        Author name.
    genre : str
        Free-text genre used for filtering and genre progress.
    excerpt : str
        Opening passage played back by the typewriter reader.
    pages : int
        Total number of pages.
    status : str
        One of ``to-read``, ``reading``, ``completed``, ``paused``.
    reading_progress : int
        Percentage read, 0 to 100.
    time_spent_minutes : int
        Accumulated reading time. Only ever increases.
    rating : int or None
        Rating from 1 to 5, if rated.
    date_added : date
        Date the book was added to the library.
    date_started : date or None
        Date reading started.
    date_finished : date or None
        Date reading finished; only meaningful when completed.
    notes : str
        Free-text reading notes.
    tags : list of str
        Tags attached to the book.
    """

    id: int
    title: str
    author: str
    genre: str = DEFAULT_GENRE
    excerpt: str = ""
    pages: int = 0
    status: str = STATUS_TO_READ
    reading_progress: int = 0
    time_spent_minutes: int = 0
    rating: Optional[int] = None
    date_added: date = field(default_factory=date.today)
    date_started: Optional[date] = None
    date_finished: Optional[date] = None
    notes: str = ""
    tags: list[str] = field(default_factory=list)

    def display_title(self, max_length: int = 50) -> str:
        """Return title truncated with ellipsis if needed.

        Parameters
        ----------
        max_length : int, optional
            Maximum character length before truncation, by default 50.

        Returns
        -------
        str
            The title, truncated with ``...`` if it exceeds *max_length*.
        """
        if len(self.title) <= max_length:
            return self.title
        return self.title[: max_length - 3] + "..."

    def display_author(self, max_length: int = 30) -> str:
        """Return author truncated with ellipsis if needed."""
        if len(self.author) <= max_length:
            return self.author
        return self.author[: max_length - 3] + "..."

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED


@dataclass
class Quote:
    """A saved quote.

    ``book_id`` is a weak reference: it is only used for lookups and may
    point at a book that has since been deleted.
    """

    id: int
    text: str
    author: str
    book: str = ""
    book_id: Optional[int] = None
    page: Optional[int] = None
    tags: list[str] = field(default_factory=list)
    date_added: date = field(default_factory=date.today)


@dataclass(frozen=True)
class ReadingSession:
    """A completed, timed reading session.

    Sessions are created when the countdown timer expires and are never
    changed afterwards. ``book_id`` is a weak reference.
    """

    id: int
    book_id: int
    date: datetime
    duration: int
    pages_read: int = 0
    notes: str = ""


@dataclass
class BookDraft:
    """Field values captured for a new book."""

    title: str
    author: str
    genre: str = ""
    excerpt: str = ""
    pages: int = 0
    notes: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class QuoteDraft:
    """Field values captured for a new quote."""

    text: str
    author: str
    book: str = ""
    book_id: Optional[int] = None
    page: Optional[int] = None
    tags: list[str] = field(default_factory=list)
