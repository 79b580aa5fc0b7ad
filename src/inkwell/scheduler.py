"""Scheduling primitives shared by the reader's timers.

The timers only need ``set_timer(delay, callback)`` and
``set_interval(interval, callback)``, each returning a handle with a
``stop()`` method. A Textual ``App`` provides exactly this, so the TUI
passes itself in. ``ManualScheduler`` is a virtual clock that fires
callbacks only when advanced, for tests and headless use.
"""

from typing import Callable, Optional, Protocol

# Float tolerance when comparing due times against the virtual clock.
_EPSILON = 1e-9


class TimerHandle(Protocol):
    def stop(self) -> None: ...


class Scheduler(Protocol):
    """Source of one-shot and repeating callbacks."""

    def set_timer(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...

    def set_interval(
        self, interval: float, callback: Callable[[], None]
    ) -> TimerHandle: ...


def stop_handle(handle: Optional[TimerHandle]) -> None:
    """Stop *handle* if there is one."""
    if handle is not None:
        handle.stop()


class ManualTimer:
    """A pending callback on a ``ManualScheduler``."""

    def __init__(
        self,
        scheduler: "ManualScheduler",
        due: float,
        callback: Callable[[], None],
        interval: Optional[float],
        seq: int,
    ) -> None:
        self._scheduler = scheduler
        self.due = due
        self.callback = callback
        self.interval = interval
        self.seq = seq
        self.active = True

    def stop(self) -> None:
        self.active = False

    def __repr__(self) -> str:
        kind = "interval" if self.interval else "timer"
        return f"<ManualTimer {kind} due={self.due:.3f} active={self.active}>"


class ManualScheduler:
    """Deterministic scheduler driven by ``advance()``.

    Callbacks fire in order of due time, ties in the order they were
    scheduled. A callback may schedule or stop other timers; those changes
    are seen by the rest of the same ``advance()`` call.
    """

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self._timers: list[ManualTimer] = []
        self._seq = 0

    def _add(self, delay: float, callback, interval: Optional[float]) -> ManualTimer:
        self._seq += 1
        timer = ManualTimer(self, self.now + delay, callback, interval, self._seq)
        self._timers.append(timer)
        return timer

    def set_timer(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        return self._add(delay, callback, None)

    def set_interval(self, interval: float, callback: Callable[[], None]) -> ManualTimer:
        if interval <= 0:
            raise ValueError("Interval must be positive")
        return self._add(interval, callback, interval)

    @property
    def pending(self) -> list[ManualTimer]:
        """Timers that have not fired (one-shot) or been stopped."""
        self._timers = [t for t in self._timers if t.active]
        return list(self._timers)

    def _next_due(self, until: float) -> Optional[ManualTimer]:
        due = [t for t in self._timers if t.active and t.due <= until + _EPSILON]
        if not due:
            return None
        return min(due, key=lambda t: (t.due, t.seq))

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every callback that comes due.

        Returns
        -------
        int
            Number of callbacks fired.
        """
        target = self.now + seconds
        fired = 0
        while True:
            timer = self._next_due(target)
            if timer is None:
                break
            self.now = max(self.now, timer.due)
            if timer.interval:
                timer.due += timer.interval
            else:
                timer.active = False
            timer.callback()
            fired += 1
        self.now = target
        self._timers = [t for t in self._timers if t.active]
        return fired
