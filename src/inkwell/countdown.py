"""Fixed-length focus timer.

The countdown ticks once a second from the configured session length down
to zero. Reaching zero stops the ticking and fires ``on_expire`` exactly
once; the timer then stays ``expired`` until it is reset or reconfigured.
"""

from typing import Callable, Optional

import structlog

from .scheduler import Scheduler, TimerHandle, stop_handle
from .stats import format_time

logger = structlog.get_logger(__name__)

IDLE = "idle"
RUNNING = "running"
PAUSED = "paused"
EXPIRED = "expired"

MIN_LENGTH = 5
MAX_LENGTH = 60
DEFAULT_LENGTH = 25


def clamp_length(minutes: int) -> int:
    """Clamp a session length (minutes) to the supported range."""
    return max(MIN_LENGTH, min(MAX_LENGTH, int(minutes)))


class CountdownTimer:
    """Focus timer counting down a session length.

    Parameters
    ----------
    scheduler : Scheduler
        Source of the one-second tick.
    length_minutes : int, optional
        Session length, 5 to 60 minutes. Defaults to 25.
    on_expire : callable, optional
        Called with the timer once when the countdown reaches zero.
    on_change : callable, optional
        Called with the timer after every tick and state change.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        length_minutes: int = DEFAULT_LENGTH,
        on_expire: Optional[Callable[["CountdownTimer"], None]] = None,
        on_change: Optional[Callable[["CountdownTimer"], None]] = None,
    ) -> None:
        self._scheduler = scheduler
        self._handle: Optional[TimerHandle] = None
        self.length_minutes = clamp_length(length_minutes)
        self.remaining = self.length_minutes * 60
        self.state = IDLE
        self.on_expire = on_expire
        self.on_change = on_change

    @property
    def running(self) -> bool:
        return self.state == RUNNING

    @property
    def full_seconds(self) -> int:
        return self.length_minutes * 60

    @property
    def formatted(self) -> str:
        return format_time(self.remaining)

    @property
    def elapsed_fraction(self) -> float:
        """Share of the session already elapsed, from 0.0 to 1.0."""
        return (self.full_seconds - self.remaining) / self.full_seconds

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def _cancel(self) -> None:
        stop_handle(self._handle)
        self._handle = None

    def start(self) -> bool:
        """Start ticking from ``idle`` or resume from ``paused``."""
        if self.state not in (IDLE, PAUSED):
            return False
        self._cancel()
        self.state = RUNNING
        self._handle = self._scheduler.set_interval(1, self._tick)
        self._notify()
        return True

    def pause(self) -> bool:
        if self.state != RUNNING:
            return False
        self._cancel()
        self.state = PAUSED
        self._notify()
        return True

    def toggle(self) -> bool:
        """Flip between running and paused.

        An expired timer must be reset first; toggling it does nothing.
        """
        if self.state == RUNNING:
            return self.pause()
        return self.start()

    def reset(self) -> None:
        """Cancel any pending tick and restore the full session length."""
        self._cancel()
        self.remaining = self.full_seconds
        self.state = IDLE
        self._notify()

    def set_length(self, minutes: int) -> bool:
        """Change the session length while the timer is not running.

        The remaining time is reset to the new full length.

        Returns
        -------
        bool
            ``False`` if the timer is running and nothing changed.
        """
        if self.running:
            logger.info("session_length_locked", requested=minutes)
            return False
        self.length_minutes = clamp_length(minutes)
        self.reset()
        return True

    def _tick(self) -> None:
        if self.state != RUNNING:
            return
        self.remaining = max(0, self.remaining - 1)
        if self.remaining > 0:
            self._notify()
            return
        self._cancel()
        self.state = EXPIRED
        logger.info("countdown_expired", length=self.length_minutes)
        self._notify()
        if self.on_expire is not None:
            self.on_expire(self)
