"""Tests for the activity log."""

import pytest

from inkwell.activity_log import ActivityLog


@pytest.fixture
def log(tmp_path):
    return ActivityLog(tmp_path / "data" / "activity.log")


def test_record_creates_parent_directory(log):
    entry = log.record("create", "cli", book_id=1, title="Dune")
    assert log.path.exists()
    assert entry.action == "create"


def test_recent_newest_first(log):
    log.record("create", "cli", book_id=1, title="Dune")
    log.record("edit", "tui", book_id=1, title="Dune", fields=["rating"])
    entries = log.recent()
    assert entries[0].timestamp >= entries[1].timestamp
    edit = next(e for e in entries if e.action == "edit")
    assert edit.source == "tui"
    assert edit.details == {"fields": ["rating"]}


def test_unwritable_path_is_skipped(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    log = ActivityLog(blocker / "activity.log")
    assert log.record("create", "cli", book_id=1) is None
    assert log.recent() == []


def test_limit(log):
    for _ in range(5):
        log.record("quote", "cli")
    assert len(log.recent(limit=3)) == 3


def test_missing_file(log):
    assert log.recent() == []


def test_malformed_lines_skipped(log):
    log.record("delete", "cli", book_id=3)
    with open(log.path, "a", encoding="utf-8") as f:
        f.write("not json\n\n{\"unexpected\": 1}\n")
    assert [e.action for e in log.recent()] == ["delete"]
