"""Tests for the reading stopwatch and time accrual."""

import pytest

from inkwell.stopwatch import Stopwatch, TimeAccrual


@pytest.fixture
def stopwatch(scheduler):
    return Stopwatch(scheduler)


class TestStopwatch:
    def test_counts_seconds_while_running(self, stopwatch, scheduler):
        stopwatch.start()
        scheduler.advance(3)
        assert stopwatch.seconds == 3
        assert stopwatch.running

    def test_pause_stops_counting(self, stopwatch, scheduler):
        stopwatch.start()
        scheduler.advance(2)
        stopwatch.pause()
        scheduler.advance(5)
        assert stopwatch.seconds == 2
        assert not stopwatch.running
        assert scheduler.pending == []

    def test_reset_zeroes_and_stops(self, stopwatch, scheduler):
        stopwatch.start()
        scheduler.advance(4)
        stopwatch.reset()
        assert stopwatch.seconds == 0
        assert not stopwatch.running
        scheduler.advance(2)
        assert stopwatch.seconds == 0

    def test_double_start_does_not_double_tick(self, stopwatch, scheduler):
        stopwatch.start()
        stopwatch.start()
        scheduler.advance(3)
        assert stopwatch.seconds == 3

    def test_formatted(self, stopwatch, scheduler):
        stopwatch.start()
        scheduler.advance(75)
        assert stopwatch.formatted == "01:15"


class TestTimeAccrual:
    @pytest.fixture
    def selection(self):
        return {"book_id": 2}

    @pytest.fixture
    def accrual(self, scheduler, stopwatch, library, selection):
        return TimeAccrual(scheduler, stopwatch, library, lambda: selection["book_id"])

    def test_accrues_one_minute_per_interval(self, accrual, stopwatch, scheduler, library):
        stopwatch.start()
        accrual.start()
        scheduler.advance(120)
        assert library.get_book(2).time_spent_minutes == 282

    def test_nothing_before_interval(self, accrual, stopwatch, scheduler, library):
        stopwatch.start()
        accrual.start()
        scheduler.advance(59)
        assert library.get_book(2).time_spent_minutes == 280

    def test_no_accrual_while_stopwatch_stopped(self, accrual, scheduler, library):
        accrual.start()
        scheduler.advance(180)
        assert library.get_book(2).time_spent_minutes == 280

    def test_no_accrual_without_selection(self, accrual, stopwatch, scheduler, library, selection):
        selection["book_id"] = None
        stopwatch.start()
        accrual.start()
        scheduler.advance(60)
        assert [b.time_spent_minutes for b in library.books][1] == 280

    def test_repeated_start_keeps_single_tick(self, accrual, stopwatch, scheduler, library):
        stopwatch.start()
        accrual.start()
        accrual.start()
        scheduler.advance(60)
        assert library.get_book(2).time_spent_minutes == 281

    def test_restart_drops_old_ticks(self, accrual, stopwatch, scheduler, library):
        stopwatch.start()
        accrual.start()
        scheduler.advance(30)
        accrual.stop()
        accrual.start()
        scheduler.advance(60)
        assert library.get_book(2).time_spent_minutes == 281
        assert len(scheduler.pending) == 2  # stopwatch + accrual
