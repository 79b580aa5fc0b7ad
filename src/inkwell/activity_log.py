"""Audit trail of library changes.

Each change made through the CLI or the TUI becomes one JSON object per
line in ``~/.inkwell/data/activity.log`` (or the path set in the settings
file). Both front ends may have the file open at once, so every read and
write holds a POSIX lock.
"""

import fcntl
import json
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import IO, Iterator, Optional

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_LOG_PATH = Path.home() / ".inkwell" / "data" / "activity.log"

ACTIONS = ("create", "edit", "delete", "quote", "session")


@dataclass
class ActivityEntry:
    """One line of the activity log.

    Attributes
    ----------
    timestamp : str
        ISO 8601 time the change was made.
    action : str
        One of ``ACTIONS``.
    source : str
        Front end that made the change, ``cli`` or ``tui``.
    book_id : int or None
        Book the change concerns, if any.
    title : str or None
        Title of that book at the time of the change.
    details : dict
        Extra key/value context for the action.
    """

    timestamp: str
    action: str
    source: str
    book_id: Optional[int] = None
    title: Optional[str] = None
    details: dict = field(default_factory=dict)


@contextmanager
def _locked(f: IO, operation: int) -> Iterator[IO]:
    fcntl.flock(f.fileno(), operation)
    try:
        yield f
    finally:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


class ActivityLog:
    """Append-only JSON Lines log file.

    Parameters
    ----------
    path : Path, optional
        Log file location. Defaults to ``DEFAULT_LOG_PATH``.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path else DEFAULT_LOG_PATH

    def record(
        self,
        action: str,
        source: str,
        book_id: Optional[int] = None,
        title: Optional[str] = None,
        **details,
    ) -> Optional[ActivityEntry]:
        """Append one entry and return it.

        A log that cannot be written is reported and skipped; the change it
        describes has already been saved. Returns ``None`` in that case.
        """
        entry = ActivityEntry(
            timestamp=datetime.now().isoformat(),
            action=action,
            source=source,
            book_id=book_id,
            title=title,
            details=details,
        )
        line = json.dumps(asdict(entry), ensure_ascii=False, default=str)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f, _locked(f, fcntl.LOCK_EX):
                f.write(line + "\n")
        except OSError as e:
            logger.warning(
                "activity_log_write_failed", path=str(self.path), action=action, error=str(e)
            )
            return None
        return entry

    def _entries(self) -> Iterator[ActivityEntry]:
        with open(self.path, "r", encoding="utf-8") as f, _locked(f, fcntl.LOCK_SH):
            for number, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    yield ActivityEntry(**json.loads(line))
                except (json.JSONDecodeError, TypeError):
                    logger.debug("activity_line_skipped", path=str(self.path), line=number)

    def recent(self, limit: int = 100) -> list[ActivityEntry]:
        """Return up to *limit* entries, newest first.

        A missing log file reads as empty; malformed lines are skipped.
        """
        if not self.path.exists():
            return []
        entries = sorted(self._entries(), key=lambda e: e.timestamp, reverse=True)
        return entries[:limit]
