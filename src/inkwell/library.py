"""In-memory record collections with write-through persistence.

``Library`` owns the books, quotes and reading sessions of one reader. It
is built from the persistent store at start-up (falling back to the seed
collections), mutated in place by the operations below, and saves the
owning collection after every change.
"""

import dataclasses
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

import structlog

from .activity_log import ActivityLog
from .models import (
    BOOK_STATUSES,
    DEFAULT_GENRE,
    STATUS_COMPLETED,
    STATUS_READING,
    STATUS_TO_READ,
    UNKNOWN_BOOK,
    Book,
    BookDraft,
    Quote,
    QuoteDraft,
    ReadingSession,
    clean_tags,
)
from .seed import seed_books, seed_quotes
from .store import BOOKS_KEY, QUOTES_KEY, SESSIONS_KEY, PersistentStore

logger = structlog.get_logger(__name__)

# Allowed fields for update_book_fields
_UPDATABLE_FIELDS = {
    "title",
    "author",
    "genre",
    "excerpt",
    "pages",
    "status",
    "reading_progress",
    "rating",
    "date_started",
    "date_finished",
    "notes",
    "tags",
}


def _next_id(records: list, now: datetime) -> int:
    """Return a millisecond timestamp id that no record in *records* uses."""
    candidate = int(now.timestamp() * 1000)
    highest = max((r.id for r in records), default=0)
    if candidate <= highest:
        candidate = highest + 1
    return candidate


class Library:
    """Books, quotes and reading sessions of one reader.

    Parameters
    ----------
    store : PersistentStore
        Store every mutation is written through to.
    books, quotes, sessions : list
        Initial collections.
    now : callable, optional
        Clock used for ids and dates. Defaults to ``datetime.now``.
    activity_log : Path, optional
        When set, mutations are also appended to this activity log.
    source : str
        Source recorded in activity log entries (``cli`` or ``tui``).
    """

    def __init__(
        self,
        store: PersistentStore,
        books: Optional[list[Book]] = None,
        quotes: Optional[list[Quote]] = None,
        sessions: Optional[list[ReadingSession]] = None,
        now: Callable[[], datetime] = datetime.now,
        activity_log: Optional[Path] = None,
        source: str = "cli",
    ) -> None:
        self.store = store
        self.books: list[Book] = list(books or [])
        self.quotes: list[Quote] = list(quotes or [])
        self.sessions: list[ReadingSession] = list(sessions or [])
        self._now = now
        self._activity_log = ActivityLog(activity_log) if activity_log else None
        self._source = source
        self._lock = threading.RLock()

    @classmethod
    def open(cls, store: PersistentStore, **kwargs) -> "Library":
        """Load all three collections from *store*.

        Books and quotes fall back to the seed collections when nothing
        usable is stored; sessions fall back to an empty list.
        """
        books = store.load(BOOKS_KEY, seed_books(), Book)
        quotes = store.load(QUOTES_KEY, seed_quotes(), Quote)
        sessions = store.load(SESSIONS_KEY, [], ReadingSession)
        logger.info(
            "library_opened",
            books=len(books),
            quotes=len(quotes),
            sessions=len(sessions),
        )
        return cls(store, books, quotes, sessions, **kwargs)

    def _log(self, action: str, book: Optional[Book] = None, **details) -> None:
        if self._activity_log is None:
            return
        self._activity_log.record(
            action,
            self._source,
            book_id=book.id if book else details.pop("book_id", None),
            title=book.title if book else details.pop("title", None),
            **details,
        )

    def _save_books(self) -> None:
        self.store.save(BOOKS_KEY, self.books)

    # Lookups

    def get_book(self, book_id: Optional[int]) -> Optional[Book]:
        """Return the book with *book_id*, or ``None``."""
        for book in self.books:
            if book.id == book_id:
                return book
        return None

    def book_title(self, book_id: Optional[int]) -> str:
        """Resolve a weak book reference to a title.

        Returns
        -------
        str
            The book's title, or ``"Unknown Book"`` when the id is unset or
            the book has been deleted.
        """
        book = self.get_book(book_id)
        return book.title if book else UNKNOWN_BOOK

    def quotes_for_book(self, book_id: int) -> list[Quote]:
        return [q for q in self.quotes if q.book_id == book_id]

    def sessions_for_book(self, book_id: int) -> list[ReadingSession]:
        return [s for s in self.sessions if s.book_id == book_id]

    def recent_sessions(self, limit: int = 5) -> list[ReadingSession]:
        """Return the last *limit* sessions, most recent first."""
        if limit <= 0:
            return []
        return list(reversed(self.sessions[-limit:]))

    # Books

    def add_book(self, draft: BookDraft) -> Optional[Book]:
        """Create a book from *draft* and append it.

        Title and author are required; when either is blank nothing is
        added.

        Returns
        -------
        Book or None
            The new book, or ``None`` if the draft was incomplete.
        """
        title = (draft.title or "").strip()
        author = (draft.author or "").strip()
        if not title or not author:
            logger.debug("book_draft_rejected", title=title, author=author)
            return None
        with self._lock:
            now = self._now()
            book = Book(
                id=_next_id(self.books, now),
                title=title,
                author=author,
                genre=(draft.genre or "").strip() or DEFAULT_GENRE,
                excerpt=draft.excerpt or "",
                pages=max(0, int(draft.pages or 0)),
                status=STATUS_TO_READ,
                reading_progress=0,
                time_spent_minutes=0,
                date_added=now.date(),
                notes=draft.notes or "",
                tags=clean_tags(draft.tags),
            )
            self.books.append(book)
            self._save_books()
        logger.info("book_added", book_id=book.id, title=book.title)
        self._log("create", book)
        return book

    def update_book(self, book: Book) -> bool:
        """Replace the book with the same id, keeping its position.

        Time spent never goes down through an update; a lower value is
        replaced by the stored one.

        Returns
        -------
        bool
            ``True`` if a book was replaced, ``False`` if the id is unknown.
        """
        with self._lock:
            for index, current in enumerate(self.books):
                if current.id != book.id:
                    continue
                if book.time_spent_minutes < current.time_spent_minutes:
                    book = dataclasses.replace(
                        book, time_spent_minutes=current.time_spent_minutes
                    )
                self.books[index] = book
                self._save_books()
                break
            else:
                logger.debug("book_update_missing", book_id=book.id)
                return False
        logger.info("book_updated", book_id=book.id)
        self._log("edit", book)
        return True

    def update_book_fields(self, book_id: int, updates: dict[str, Any]) -> Optional[Book]:
        """Update specific fields of the book with *book_id*.

        Moving a book to ``reading`` stamps ``date_started`` and moving it to
        ``completed`` stamps ``date_finished`` and sets progress to 100,
        unless those are given or already set.

        Parameters
        ----------
        book_id : int
            Id of the book to update.
        updates : dict of str to any
            Mapping of field names to new values.

        Returns
        -------
        Book or None
            The updated book, or ``None`` if no book has *book_id*.

        Raises
        ------
        ValueError
            If *updates* names a field not in ``_UPDATABLE_FIELDS``, or a
            status, rating or progress value is out of range.
        """
        invalid_fields = set(updates) - _UPDATABLE_FIELDS
        if invalid_fields:
            raise ValueError(f"Invalid field(s): {', '.join(sorted(invalid_fields))}")
        status = updates.get("status")
        if status is not None and status not in BOOK_STATUSES:
            raise ValueError(f"Invalid status: {status}")
        rating = updates.get("rating")
        if rating is not None and not 1 <= rating <= 5:
            raise ValueError(f"Rating must be between 1 and 5, got {rating}")
        progress = updates.get("reading_progress")
        if progress is not None and not 0 <= progress <= 100:
            raise ValueError(f"Progress must be between 0 and 100, got {progress}")

        with self._lock:
            book = self.get_book(book_id)
            if book is None:
                return None
            changes = dict(updates)
            if "tags" in changes:
                changes["tags"] = clean_tags(changes["tags"])
            today = self._now().date()
            if status == STATUS_READING and not book.date_started:
                changes.setdefault("date_started", today)
            if status == STATUS_COMPLETED:
                if not book.date_finished:
                    changes.setdefault("date_finished", today)
                changes.setdefault("reading_progress", 100)
            updated = dataclasses.replace(book, **changes)
            self.update_book(updated)
        return updated

    def delete_book(self, book_id: int) -> bool:
        """Remove the book with *book_id*.

        Quotes and sessions referring to it are left untouched; their
        references resolve to ``"Unknown Book"`` from then on.
        """
        with self._lock:
            book = self.get_book(book_id)
            if book is None:
                return False
            self.books.remove(book)
            self._save_books()
        logger.info("book_deleted", book_id=book_id)
        self._log("delete", book)
        return True

    def record_time(self, book_id: int, minutes: int = 1) -> Optional[Book]:
        """Add *minutes* of reading time to a book and persist it."""
        if minutes <= 0:
            return None
        with self._lock:
            book = self.get_book(book_id)
            if book is None:
                return None
            book.time_spent_minutes += minutes
            self._save_books()
        logger.debug("reading_time_recorded", book_id=book_id, total=book.time_spent_minutes)
        return book

    # Quotes

    def add_quote(self, draft: QuoteDraft) -> Optional[Quote]:
        """Create a quote from *draft*; text and author are required."""
        text = (draft.text or "").strip()
        author = (draft.author or "").strip()
        if not text or not author:
            logger.debug("quote_draft_rejected")
            return None
        with self._lock:
            now = self._now()
            quote = Quote(
                id=_next_id(self.quotes, now),
                text=text,
                author=author,
                book=draft.book or "",
                book_id=draft.book_id,
                page=draft.page or None,
                tags=clean_tags(draft.tags),
                date_added=now.date(),
            )
            self.quotes.append(quote)
            self.store.save(QUOTES_KEY, self.quotes)
        logger.info("quote_added", quote_id=quote.id)
        self._log("quote", book_id=quote.book_id, title=quote.book or None, quote_id=quote.id)
        return quote

    # Sessions

    def append_session(self, session: ReadingSession) -> ReadingSession:
        """Append a reading session under a freshly assigned id."""
        with self._lock:
            session = dataclasses.replace(
                session, id=_next_id(self.sessions, self._now())
            )
            self.sessions.append(session)
            self.store.save(SESSIONS_KEY, self.sessions)
        logger.info(
            "session_recorded",
            session_id=session.id,
            book_id=session.book_id,
            duration=session.duration,
        )
        self._log(
            "session",
            book_id=session.book_id,
            title=self.book_title(session.book_id),
            duration=session.duration,
            pages_read=session.pages_read,
        )
        return session

    def flush(self) -> None:
        """Persist all three collections."""
        with self._lock:
            self._save_books()
            self.store.save(QUOTES_KEY, self.quotes)
            self.store.save(SESSIONS_KEY, self.sessions)
