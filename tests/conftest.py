"""Shared fixtures for the Inkwell test suite."""

from datetime import datetime

import pytest
import structlog

from inkwell.context import ReadingContext
from inkwell.library import Library
from inkwell.models import Book
from inkwell.scheduler import ManualScheduler
from inkwell.storage import MemoryStorage
from inkwell.store import PersistentStore

NOW = datetime(2024, 5, 1, 12, 0, 0)


def fixed_now() -> datetime:
    return NOW


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return PersistentStore(storage)


@pytest.fixture
def library(store):
    return Library.open(store, now=fixed_now)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def context(library, scheduler):
    return ReadingContext(library, scheduler, now=fixed_now)


def make_book(book_id: int, **kwargs) -> Book:
    kwargs.setdefault("title", f"Book {book_id}")
    kwargs.setdefault("author", "Author")
    return Book(id=book_id, **kwargs)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
