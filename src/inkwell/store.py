"""Typed persistence of record collections over key-value storage.

Each collection is stored under its own key as a JSON array. Date fields
are written as ISO-8601 strings and rebuilt as ``date`` / ``datetime``
values on load. Reads that fail for any reason return the caller's default;
writes that fail are logged and dropped so that interactive use is never
blocked by a storage problem.
"""

import dataclasses
import json
from datetime import date, datetime
from typing import Optional, TypeVar

import structlog

from .models import Book, Quote, ReadingSession
from .storage import KeyValueStorage

logger = structlog.get_logger(__name__)

BOOKS_KEY = "reading-app-books"
QUOTES_KEY = "reading-app-quotes"
SESSIONS_KEY = "reading-sessions"

_DATE_FIELDS = {"date_added", "date_started", "date_finished"}
_DATETIME_FIELDS = {"date"}

# Scalar field -> expected JSON type
_FIELD_TYPES = {
    "id": int,
    "book_id": int,
    "pages": int,
    "reading_progress": int,
    "time_spent_minutes": int,
    "rating": int,
    "page": int,
    "duration": int,
    "pages_read": int,
    "title": str,
    "author": str,
    "genre": str,
    "excerpt": str,
    "status": str,
    "notes": str,
    "text": str,
    "book": str,
    "tags": list,
}
_NULLABLE_FIELDS = {"book_id", "rating", "page"}

T = TypeVar("T", Book, Quote, ReadingSession)


class RecordDecodeError(ValueError):
    """Raised when a stored record cannot be rebuilt."""


def _parse_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO-format date string.

    Full timestamps (``2024-01-15T00:00:00.000Z``) are accepted and
    truncated to their date part.

    Parameters
    ----------
    value : str or None
        A date string, or ``None``.

    Returns
    -------
    date or None
        The parsed date, or ``None`` if the input is empty.

    Raises
    ------
    RecordDecodeError
        If the value is not a recognisable date.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    return _parse_datetime(value).date()


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
    if not value:
        return None
    if not isinstance(value, str):
        raise RecordDecodeError(f"Expected ISO timestamp, got {value!r}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise RecordDecodeError(f"Invalid timestamp: {value!r}") from e


def _check_type(key: str, value) -> None:
    expected = _FIELD_TYPES.get(key)
    if expected is None or (value is None and key in _NULLABLE_FIELDS):
        return
    # bool is an int subclass but never a valid count or id
    if isinstance(value, bool) or not isinstance(value, expected):
        raise RecordDecodeError(
            f"Field {key!r} expected {expected.__name__}, got {type(value).__name__}"
        )
    if expected is list and not all(isinstance(item, str) for item in value):
        raise RecordDecodeError(f"Field {key!r} must contain only strings")


def record_to_dict(record) -> dict:
    """Convert a record dataclass to a JSON-serialisable dictionary.

    Parameters
    ----------
    record : Book, Quote or ReadingSession
        The record to convert.

    Returns
    -------
    dict
        Record fields with ``date`` and ``datetime`` values converted to
        ISO strings.
    """
    data = dataclasses.asdict(record)
    for key, value in data.items():
        if isinstance(value, (date, datetime)):
            data[key] = value.isoformat()
    return data


def record_from_dict(record_type: type[T], data: dict) -> T:
    """Rebuild a record from its stored dictionary.

    Unknown keys are ignored. Date fields are parsed back into date values.

    Raises
    ------
    RecordDecodeError
        If *data* is not a mapping, a required field is missing, a field
        holds a value of the wrong JSON type, or a date field is malformed.
    """
    if not isinstance(data, dict):
        raise RecordDecodeError(f"Expected object, got {type(data).__name__}")
    names = {f.name for f in dataclasses.fields(record_type)}
    kwargs = {}
    for key, value in data.items():
        if key not in names:
            continue
        if key in _DATE_FIELDS:
            value = _parse_date(value)
        elif key in _DATETIME_FIELDS:
            value = _parse_datetime(value)
        else:
            _check_type(key, value)
        kwargs[key] = value
    try:
        return record_type(**kwargs)
    except TypeError as e:
        raise RecordDecodeError(str(e)) from e


class PersistentStore:
    """Load and save record collections through a key-value provider.

    Parameters
    ----------
    storage : KeyValueStorage
        Provider exposing ``get(key)`` and ``set(key, value)``.
    """

    def __init__(self, storage: KeyValueStorage) -> None:
        self.storage = storage

    def load(self, key: str, default: list[T], record_type: type[T]) -> list[T]:
        """Read the collection stored under *key*.

        Parameters
        ----------
        key : str
            Storage key of the collection.
        default : list
            Returned when the key is absent or its content is unreadable.
        record_type : type
            Record dataclass to rebuild each element as.

        Returns
        -------
        list
            The stored records, or *default*.
        """
        try:
            raw = self.storage.get(key)
        except Exception as e:
            logger.warning("store_read_failed", key=key, error=str(e))
            return default
        if raw is None:
            logger.debug("store_key_missing", key=key)
            return default
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise RecordDecodeError(f"Expected array, got {type(items).__name__}")
            records = [record_from_dict(record_type, item) for item in items]
        except (ValueError, RecordDecodeError) as e:
            logger.warning("store_decode_failed", key=key, error=str(e))
            return default
        logger.debug("store_loaded", key=key, count=len(records))
        return records

    def save(self, key: str, records: list) -> None:
        """Serialize *records* and write them under *key*.

        Failures are logged and swallowed.
        """
        try:
            payload = json.dumps(
                [record_to_dict(r) for r in records], ensure_ascii=False
            )
            self.storage.set(key, payload)
        except Exception as e:
            logger.error("store_write_failed", key=key, error=str(e))
            return
        logger.debug("store_saved", key=key, count=len(records))
