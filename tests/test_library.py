"""Tests for the record collections."""

import dataclasses
from datetime import date

import pytest

from inkwell.activity_log import ActivityLog
from inkwell.library import Library
from inkwell.models import Book, BookDraft, QuoteDraft, ReadingSession
from inkwell.seed import seed_books
from inkwell.store import BOOKS_KEY, QUOTES_KEY, SESSIONS_KEY, PersistentStore

from .conftest import NOW, fixed_now


def _reload(storage) -> Library:
    return Library.open(PersistentStore(storage), now=fixed_now)


class TestOpen:
    def test_empty_storage_falls_back_to_seeds(self, library):
        assert [b.title for b in library.books][:2] == ["The Great Gatsby", "Pride and Prejudice"]
        assert len(library.quotes) == 3
        assert library.sessions == []

    def test_unreadable_storage_falls_back_to_seeds(self, storage):
        storage.set(BOOKS_KEY, "garbage")
        library = _reload(storage)
        assert len(library.books) == 6


class TestAddBook:
    def test_defaults_assigned(self, library):
        book = library.add_book(BookDraft(title="Emma", author="Jane Austen"))
        assert book.status == "to-read"
        assert book.reading_progress == 0
        assert book.time_spent_minutes == 0
        assert book.genre == "Uncategorized"
        assert book.date_added == NOW.date()
        assert library.books[-1] is book

    @pytest.mark.parametrize("title,author", [("", "A"), ("T", ""), ("   ", "A")])
    def test_missing_title_or_author_is_noop(self, library, title, author):
        before = list(library.books)
        assert library.add_book(BookDraft(title=title, author=author)) is None
        assert library.books == before

    def test_ids_never_collide(self, library):
        first = library.add_book(BookDraft(title="One", author="A"))
        second = library.add_book(BookDraft(title="Two", author="A"))
        ids = [b.id for b in library.books]
        assert first.id != second.id
        assert len(ids) == len(set(ids))

    def test_tags_cleaned(self, library):
        book = library.add_book(BookDraft(title="T", author="A", tags=[" a", "b", "a", ""]))
        assert book.tags == ["a", "b"]

    def test_persisted(self, library, storage):
        library.add_book(BookDraft(title="Emma", author="Jane Austen"))
        assert _reload(storage).books[-1].title == "Emma"


class TestUpdateBook:
    def test_replaces_in_place(self, library):
        book = dataclasses.replace(library.books[2], status="reading")
        assert library.update_book(book)
        assert library.books[2].status == "reading"

    def test_unknown_id_is_noop(self, library):
        before = list(library.books)
        assert not library.update_book(Book(id=999, title="X", author="Y"))
        assert library.books == before

    def test_time_spent_never_decreases(self, library):
        book = dataclasses.replace(library.books[0], time_spent_minutes=0, notes="edited")
        library.update_book(book)
        assert library.books[0].time_spent_minutes == 420
        assert library.books[0].notes == "edited"

    def test_persisted(self, library, storage):
        library.update_book(dataclasses.replace(library.books[0], rating=3))
        assert _reload(storage).books[0].rating == 3


class TestUpdateBookFields:
    def test_start_reading_stamps_date_started(self, library):
        book = library.update_book_fields(3, {"status": "reading"})
        assert book.date_started == NOW.date()

    def test_complete_stamps_finish_and_progress(self, library):
        book = library.update_book_fields(5, {"status": "completed", "rating": 4})
        assert book.date_finished == NOW.date()
        assert book.reading_progress == 100
        assert book.date_started == date(2024, 3, 1)

    def test_invalid_field_raises(self, library):
        with pytest.raises(ValueError, match="Invalid field"):
            library.update_book_fields(1, {"id": 5})

    def test_time_spent_not_updatable(self, library):
        with pytest.raises(ValueError):
            library.update_book_fields(1, {"time_spent_minutes": 0})

    @pytest.mark.parametrize("updates", [{"rating": 6}, {"reading_progress": 101}, {"status": "lost"}])
    def test_out_of_range_raises(self, library, updates):
        with pytest.raises(ValueError):
            library.update_book_fields(1, updates)

    def test_unknown_book_returns_none(self, library):
        assert library.update_book_fields(999, {"notes": "x"}) is None


class TestDeleteBook:
    def test_quote_survives_and_resolves_unknown(self, library):
        quote = library.quotes[1]
        assert quote.book_id == 5
        assert library.delete_book(5)
        assert quote in library.quotes
        assert library.book_title(quote.book_id) == "Unknown Book"

    def test_sessions_not_cascaded(self, library):
        library.append_session(ReadingSession(id=0, book_id=2, date=NOW, duration=25))
        library.delete_book(2)
        assert len(library.sessions) == 1
        assert library.book_title(2) == "Unknown Book"

    def test_unknown_id(self, library):
        assert not library.delete_book(999)

    def test_persisted(self, library, storage):
        library.delete_book(1)
        assert 1 not in [b.id for b in _reload(storage).books]


class TestQuotes:
    def test_add_quote(self, library, storage):
        quote = library.add_quote(QuoteDraft(text="Call me Ishmael.", author="Herman Melville", page=1))
        assert quote.id not in (1, 2, 3)
        assert quote.date_added == NOW.date()
        assert _reload(storage).quotes[-1].text == "Call me Ishmael."

    def test_missing_text_is_noop(self, library):
        assert library.add_quote(QuoteDraft(text="", author="A")) is None
        assert len(library.quotes) == 3

    def test_quotes_for_book(self, library):
        assert [q.id for q in library.quotes_for_book(4)] == [3]


class TestSessions:
    def test_append_assigns_fresh_id(self, library, storage):
        first = library.append_session(ReadingSession(id=1, book_id=1, date=NOW, duration=25))
        second = library.append_session(ReadingSession(id=1, book_id=1, date=NOW, duration=30))
        assert first.id != second.id
        assert [s.duration for s in _reload(storage).sessions] == [25, 30]

    def test_recent_sessions_newest_first(self, library):
        for minutes in (5, 10, 15, 20, 25, 30):
            library.append_session(ReadingSession(id=0, book_id=1, date=NOW, duration=minutes))
        assert [s.duration for s in library.recent_sessions()] == [30, 25, 20, 15, 10]


class TestRecordTime:
    def test_increments_and_persists(self, library, storage):
        library.record_time(2, 1)
        assert library.get_book(2).time_spent_minutes == 281
        assert _reload(storage).get_book(2).time_spent_minutes == 281

    def test_unknown_book(self, library):
        assert library.record_time(999) is None


class TestActivityLog:
    def test_mutations_logged(self, store, tmp_path):
        log_path = tmp_path / "activity.log"
        library = Library(store, seed_books(), now=fixed_now, activity_log=log_path, source="tui")
        book = library.add_book(BookDraft(title="Emma", author="Jane Austen"))
        library.delete_book(book.id)
        entries = ActivityLog(log_path).recent()
        assert {e.action for e in entries} == {"create", "delete"}
        assert all(e.source == "tui" for e in entries)
        assert all(e.book_id == book.id for e in entries)

    def test_unwritable_log_does_not_block_changes(self, store, storage, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        library = Library(store, seed_books(), now=fixed_now, activity_log=blocker / "activity.log")
        book = library.add_book(BookDraft(title="Emma", author="Jane Austen"))
        library.append_session(ReadingSession(id=0, book_id=book.id, date=NOW, duration=25))
        assert library.delete_book(book.id)
        reloaded = _reload(storage)
        assert book.id not in [b.id for b in reloaded.books]
        assert len(reloaded.sessions) == 1


def test_flush_writes_all_collections(library, storage):
    library.flush()
    assert storage.get(BOOKS_KEY) is not None
    assert storage.get(QUOTES_KEY) is not None
    assert storage.get(SESSIONS_KEY) == "[]"
