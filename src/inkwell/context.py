"""Reading context tying the library to the reader's timers.

``ReadingContext`` is the single object the CLI and TUI talk to. It owns the
library, the typewriter, the stopwatch with its time accrual, and the
countdown timer, and makes sure that changing the selected book or closing
the context leaves no timer running against stale state.
"""

from datetime import datetime
from typing import Callable, Optional

import structlog

from .countdown import DEFAULT_LENGTH, CountdownTimer
from .library import Library
from .models import Book, BookDraft, Quote, QuoteDraft, ReadingSession
from .scheduler import Scheduler
from .stats import ALL, Statistics, compute_statistics, filter_books, unique_genres
from .stopwatch import ACCRUAL_INTERVAL, Stopwatch, TimeAccrual
from .typewriter import DEFAULT_SPEED, Typewriter

logger = structlog.get_logger(__name__)


class ReadingContext:
    """Library plus the timers of one reading session.

    Parameters
    ----------
    library : Library
        The reader's record collections.
    scheduler : Scheduler
        Timer source (a Textual ``App`` or a ``ManualScheduler``).
    now : callable, optional
        Clock used to date reading sessions.
    session_length : int, optional
        Initial countdown length in minutes.
    reading_speed : int, optional
        Initial typewriter delay in milliseconds.
    accrual_interval : float, optional
        Seconds between reading-time accruals.
    """

    def __init__(
        self,
        library: Library,
        scheduler: Scheduler,
        now: Callable[[], datetime] = datetime.now,
        session_length: int = DEFAULT_LENGTH,
        reading_speed: int = DEFAULT_SPEED,
        accrual_interval: float = ACCRUAL_INTERVAL,
    ) -> None:
        self.library = library
        self._now = now
        self.selected_id: Optional[int] = None
        self.session_pages = 0
        self.session_notes = ""
        self.typewriter = Typewriter(scheduler, speed=reading_speed)
        self.stopwatch = Stopwatch(scheduler)
        self.accrual = TimeAccrual(
            scheduler,
            self.stopwatch,
            library,
            lambda: self.selected_id,
            interval=accrual_interval,
        )
        self.countdown = CountdownTimer(
            scheduler, length_minutes=session_length, on_expire=self._on_countdown_expired
        )

    @property
    def selected_book(self) -> Optional[Book]:
        return self.library.get_book(self.selected_id)

    # Collection operations

    def add_book(self, draft: BookDraft) -> Optional[Book]:
        return self.library.add_book(draft)

    def update_book(self, book: Book) -> bool:
        updated = self.library.update_book(book)
        if updated and book.id == self.selected_id:
            # Keep the reader on the same excerpt unless it was edited.
            if self.typewriter.excerpt != book.excerpt:
                self.typewriter.load(book.excerpt)
        return updated

    def delete_book(self, book_id: int) -> bool:
        deleted = self.library.delete_book(book_id)
        if deleted and book_id == self.selected_id:
            self.select_book(None)
        return deleted

    def add_quote(self, draft: QuoteDraft) -> Optional[Quote]:
        return self.library.add_quote(draft)

    # Reader

    def _stop_reading(self) -> None:
        self.typewriter.reset()
        self.stopwatch.reset()
        self.accrual.stop()

    def select_book(self, book_id: Optional[int]) -> Optional[Book]:
        """Make *book_id* the active book.

        Every timer belonging to the previous selection is cancelled and the
        typewriter is reset onto the new excerpt. An unknown id clears the
        selection.
        """
        book = self.library.get_book(book_id)
        self._stop_reading()
        self.countdown.reset()
        self.session_pages = 0
        self.session_notes = ""
        self.selected_id = book.id if book else None
        self.typewriter.load(book.excerpt if book else None)
        logger.debug("book_selected", book_id=self.selected_id)
        return book

    def start_reading(self) -> bool:
        """Start the typewriter and the stopwatch for the selected book."""
        if self.selected_id is None:
            return False
        self.typewriter.start()
        self.stopwatch.start()
        self.accrual.start()
        return True

    def pause_reading(self) -> None:
        self.typewriter.pause()
        self.stopwatch.pause()
        self.accrual.stop()

    def toggle_reading(self) -> bool:
        """Pause while the stopwatch runs, otherwise start reading.

        The stopwatch decides, not the typewriter, so a finished excerpt
        can still be paused. Returns whether reading is now running.
        """
        if self.stopwatch.running:
            self.pause_reading()
            return False
        return self.start_reading()

    def reset_reading(self) -> None:
        self._stop_reading()

    def set_reading_speed(self, speed: int) -> int:
        self.typewriter.speed = speed
        return self.typewriter.speed

    # Countdown

    def start_countdown(self) -> bool:
        return self.countdown.start()

    def toggle_countdown(self) -> bool:
        return self.countdown.toggle()

    def reset_countdown(self) -> None:
        self.countdown.reset()

    def set_session_length(self, minutes: int) -> bool:
        return self.countdown.set_length(minutes)

    def set_session_details(self, pages_read: int = 0, notes: str = "") -> None:
        """Set the pages and notes recorded when the countdown expires."""
        self.session_pages = max(0, int(pages_read))
        self.session_notes = notes or ""

    def _on_countdown_expired(self, countdown: CountdownTimer) -> None:
        if self.selected_id is None:
            return
        self.library.append_session(
            ReadingSession(
                id=0,
                book_id=self.selected_id,
                date=self._now(),
                duration=countdown.length_minutes,
                pages_read=self.session_pages,
                notes=self.session_notes,
            )
        )

    # Derived views

    def compute_statistics(self) -> Statistics:
        return compute_statistics(self.library.books)

    def filter_books(self, search: str = "", status: str = ALL, genre: str = ALL) -> list[Book]:
        return filter_books(self.library.books, search, status, genre)

    def unique_genres(self) -> list[str]:
        return unique_genres(self.library.books)

    def close(self) -> None:
        """Cancel every timer and flush the library."""
        self._stop_reading()
        self.countdown.reset()
        self.library.flush()
        logger.debug("reading_context_closed")
