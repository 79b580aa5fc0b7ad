"""Free-running reading stopwatch and the time accrual process.

The stopwatch counts seconds while a reading session is open. The accrual
process runs beside it and, once per interval, credits a minute of reading
time to the selected book while the stopwatch is running.
"""

from typing import Callable, Optional

import structlog

from .library import Library
from .scheduler import Scheduler, TimerHandle, stop_handle
from .stats import format_time

logger = structlog.get_logger(__name__)

ACCRUAL_INTERVAL = 60


class Stopwatch:
    """Elapsed-seconds counter with ``running`` / ``stopped`` states."""

    def __init__(
        self,
        scheduler: Scheduler,
        on_change: Optional[Callable[["Stopwatch"], None]] = None,
    ) -> None:
        self._scheduler = scheduler
        self._handle: Optional[TimerHandle] = None
        self.on_change = on_change
        self.seconds = 0

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def formatted(self) -> str:
        return format_time(self.seconds)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def start(self) -> None:
        if self.running:
            return
        self._handle = self._scheduler.set_interval(1, self._tick)
        self._notify()

    def pause(self) -> None:
        stop_handle(self._handle)
        self._handle = None
        self._notify()

    def reset(self) -> None:
        stop_handle(self._handle)
        self._handle = None
        self.seconds = 0
        self._notify()

    def _tick(self) -> None:
        if not self.running:
            return
        self.seconds += 1
        self._notify()


class TimeAccrual:
    """Credits reading time to the selected book once per interval.

    Parameters
    ----------
    scheduler : Scheduler
        Source of the repeating accrual tick.
    stopwatch : Stopwatch
        Accrual only happens while this stopwatch is running.
    library : Library
        Library the minutes are recorded in.
    selected : callable
        Returns the currently selected book id, or ``None``.
    interval : float, optional
        Seconds between accruals, by default 60.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        stopwatch: Stopwatch,
        library: Library,
        selected: Callable[[], Optional[int]],
        interval: float = ACCRUAL_INTERVAL,
    ) -> None:
        self._scheduler = scheduler
        self._stopwatch = stopwatch
        self._library = library
        self._selected = selected
        self.interval = interval
        self._handle: Optional[TimerHandle] = None
        # Bumped on every start/stop; ticks from an older run are dropped.
        self._generation = 0
        self._accruing = False

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Begin accruing. Does nothing if already started."""
        if self.active:
            return
        self._generation += 1
        generation = self._generation
        self._handle = self._scheduler.set_interval(
            self.interval, lambda: self._tick(generation)
        )

    def stop(self) -> None:
        self._generation += 1
        stop_handle(self._handle)
        self._handle = None

    def _tick(self, generation: int) -> None:
        if generation != self._generation or self._accruing:
            return
        book_id = self._selected()
        if not self._stopwatch.running or book_id is None:
            return
        self._accruing = True
        try:
            book = self._library.record_time(book_id, 1)
        finally:
            self._accruing = False
        if book is not None:
            logger.debug("reading_time_accrued", book_id=book_id, total=book.time_spent_minutes)
