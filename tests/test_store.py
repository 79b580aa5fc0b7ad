"""Tests for key-value storage and the persistent store."""

import json
from datetime import date, datetime

import pytest

from inkwell.library import Library
from inkwell.models import Book, BookDraft, Quote, ReadingSession
from inkwell.seed import seed_books, seed_quotes
from inkwell.storage import MemoryStorage, SqliteStorage
from inkwell.store import BOOKS_KEY, QUOTES_KEY, PersistentStore, record_from_dict


class FailingStorage:
    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        raise OSError("disk full")


class TestRoundTrip:
    def test_books_round_trip_field_for_field(self, store):
        books = seed_books()
        store.save(BOOKS_KEY, books)
        loaded = store.load(BOOKS_KEY, [], Book)
        assert loaded == books

    def test_dates_come_back_as_dates(self, store):
        store.save(BOOKS_KEY, seed_books())
        gatsby = store.load(BOOKS_KEY, [], Book)[0]
        assert isinstance(gatsby.date_added, date)
        assert gatsby.date_finished == date(2024, 2, 5)
        assert (gatsby.date_finished - gatsby.date_started).days == 16

    def test_dates_stored_as_iso_strings(self, store, storage):
        store.save(BOOKS_KEY, seed_books()[:1])
        raw = json.loads(storage.get(BOOKS_KEY))
        assert raw[0]["date_added"] == "2024-01-15"

    def test_session_datetime_round_trip(self, store):
        session = ReadingSession(
            id=7, book_id=1, date=datetime(2024, 5, 1, 9, 30), duration=25, pages_read=12
        )
        store.save("sessions", [session])
        loaded = store.load("sessions", [], ReadingSession)
        assert loaded == [session]
        assert isinstance(loaded[0].date, datetime)

    def test_quotes_round_trip(self, store):
        quotes = seed_quotes()
        store.save("quotes", quotes)
        assert store.load("quotes", [], Quote) == quotes


class TestLoadFallback:
    def test_missing_key_returns_default(self, store):
        default = seed_books()
        assert store.load(BOOKS_KEY, default, Book) is default

    def test_malformed_json_returns_default(self, storage, store):
        storage.set(BOOKS_KEY, "{not json")
        assert store.load(BOOKS_KEY, [], Book) == []

    def test_non_list_payload_returns_default(self, storage, store):
        storage.set(BOOKS_KEY, json.dumps({"id": 1}))
        assert store.load(BOOKS_KEY, ["x"], Book) == ["x"]

    def test_bad_date_returns_default(self, storage, store):
        storage.set(BOOKS_KEY, json.dumps([{"id": 1, "title": "T", "author": "A", "date_added": "soon"}]))
        assert store.load(BOOKS_KEY, [], Book) == []

    def test_missing_required_field_returns_default(self, storage, store):
        storage.set(BOOKS_KEY, json.dumps([{"id": 1, "title": "T"}]))
        assert store.load(BOOKS_KEY, [], Book) == []

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": "7"},
            {"pages": "300"},
            {"time_spent_minutes": None},
            {"rating": True},
            {"title": 42},
            {"tags": "classic"},
            {"tags": ["ok", 3]},
        ],
    )
    def test_wrongly_typed_field_returns_default(self, storage, store, overrides):
        record = {"id": 7, "title": "X", "author": "Y", **overrides}
        storage.set(BOOKS_KEY, json.dumps([record]))
        assert store.load(BOOKS_KEY, [], Book) == []

    def test_nullable_fields_accept_null(self, storage, store):
        storage.set(
            QUOTES_KEY,
            json.dumps([{"id": 1, "text": "T", "author": "A", "book_id": None, "page": None}]),
        )
        assert store.load(QUOTES_KEY, [], Quote)[0].book_id is None

    def test_library_survives_wrongly_typed_id(self, storage, store):
        storage.set(BOOKS_KEY, json.dumps([{"id": "7", "title": "X", "author": "Y"}]))
        library = Library.open(store)
        assert len(library.books) == len(seed_books())
        assert library.add_book(BookDraft(title="New", author="Someone")) is not None

    def test_read_error_returns_default(self):
        store = PersistentStore(FailingStorage())
        assert store.load(BOOKS_KEY, [], Book) == []


class TestSave:
    def test_write_error_is_swallowed(self):
        store = PersistentStore(FailingStorage())
        store.save(BOOKS_KEY, seed_books())

    def test_save_overwrites_previous_value(self, store):
        store.save(BOOKS_KEY, seed_books())
        store.save(BOOKS_KEY, seed_books()[:2])
        assert len(store.load(BOOKS_KEY, [], Book)) == 2


class TestRecordFromDict:
    def test_unknown_keys_ignored(self):
        book = record_from_dict(Book, {"id": 3, "title": "T", "author": "A", "legacy": True})
        assert book.id == 3

    def test_full_timestamp_accepted_for_date_field(self):
        book = record_from_dict(
            Book, {"id": 3, "title": "T", "author": "A", "date_added": "2024-01-15T00:00:00.000Z"}
        )
        assert book.date_added == date(2024, 1, 15)


class TestStorageProviders:
    def test_memory_storage(self):
        storage = MemoryStorage()
        assert storage.get("k") is None
        storage.set("k", "v")
        assert storage.get("k") == "v"

    def test_sqlite_storage_persists_across_connections(self, tmp_path):
        db_path = tmp_path / "data" / "inkwell.db"
        storage = SqliteStorage(db_path)
        storage.set("k", "one")
        storage.set("k", "two")
        storage.close()

        reopened = SqliteStorage(db_path)
        assert reopened.get("k") == "two"
        assert reopened.keys() == ["k"]
        reopened.close()

    def test_sqlite_backed_store_round_trip(self, tmp_path):
        storage = SqliteStorage(tmp_path / "inkwell.db")
        store = PersistentStore(storage)
        store.save(BOOKS_KEY, seed_books())
        assert store.load(BOOKS_KEY, [], Book) == seed_books()
        storage.close()
