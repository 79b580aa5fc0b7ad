"""Character-by-character excerpt playback.

The typewriter reveals a book's excerpt one character per step, with a
configurable delay between steps. Only one step is ever pending: it is
scheduled after each reveal while playing, and cancelled by ``pause``,
``reset``, ``load`` or a speed change before anything new is scheduled.
"""

from typing import Callable, Optional

import structlog

from .scheduler import Scheduler, TimerHandle, stop_handle

logger = structlog.get_logger(__name__)

IDLE = "idle"
PLAYING = "playing"
PAUSED = "paused"
COMPLETE = "complete"

MIN_SPEED = 20
MAX_SPEED = 200
DEFAULT_SPEED = 100


def clamp_speed(speed: int) -> int:
    """Clamp a per-character delay (milliseconds) to the supported range."""
    return max(MIN_SPEED, min(MAX_SPEED, int(speed)))


class Typewriter:
    """Cooperative text reveal over a single excerpt.

    Parameters
    ----------
    scheduler : Scheduler
        Source of one-shot timers.
    speed : int, optional
        Delay between characters in milliseconds (20-200).
    on_change : callable, optional
        Called with the typewriter after every state or text change.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        speed: int = DEFAULT_SPEED,
        on_change: Optional[Callable[["Typewriter"], None]] = None,
    ) -> None:
        self._scheduler = scheduler
        self._speed = clamp_speed(speed)
        self._handle: Optional[TimerHandle] = None
        self.on_change = on_change
        self.excerpt: Optional[str] = None
        self.state = IDLE
        self.cursor = 0
        self.revealed = ""

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: int) -> None:
        self._speed = clamp_speed(value)
        if self.state == PLAYING:
            self._cancel()
            self._schedule()

    @property
    def length(self) -> int:
        return len(self.excerpt or "")

    @property
    def progress(self) -> float:
        """Percentage of the excerpt revealed so far."""
        if not self.length:
            return 100.0 if self.state == COMPLETE else 0.0
        return self.cursor / self.length * 100

    @property
    def has_pending_step(self) -> bool:
        return self._handle is not None

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def _cancel(self) -> None:
        stop_handle(self._handle)
        self._handle = None

    def _schedule(self) -> None:
        self._handle = self._scheduler.set_timer(self._speed / 1000, self._step)

    def load(self, excerpt: Optional[str]) -> None:
        """Reset and switch to a new excerpt (``None`` for no selection)."""
        self.reset()
        self.excerpt = excerpt

    def start(self) -> bool:
        """Start or resume playback.

        Only valid from ``idle`` or ``paused`` with an excerpt loaded. An
        empty excerpt completes immediately without scheduling a step.

        Returns
        -------
        bool
            ``True`` if the state changed.
        """
        if self.excerpt is None or self.state not in (IDLE, PAUSED):
            return False
        if self.cursor >= self.length:
            self.state = COMPLETE
            self._notify()
            return True
        self.state = PLAYING
        self._cancel()
        self._schedule()
        self._notify()
        return True

    def pause(self) -> bool:
        """Suspend playback, keeping the cursor."""
        if self.state != PLAYING:
            return False
        self._cancel()
        self.state = PAUSED
        self._notify()
        return True

    def reset(self) -> None:
        """Return to ``idle`` with nothing revealed."""
        self._cancel()
        self.state = IDLE
        self.cursor = 0
        self.revealed = ""
        self._notify()

    def _step(self) -> None:
        self._handle = None
        if self.state != PLAYING or self.excerpt is None:
            return
        if self.cursor < self.length:
            self.revealed += self.excerpt[self.cursor]
            self.cursor += 1
        if self.cursor >= self.length:
            self.state = COMPLETE
            logger.debug("typewriter_complete", length=self.length)
        else:
            self._schedule()
        self._notify()
