"""Tests for the countdown focus timer."""

import pytest

from inkwell.countdown import EXPIRED, IDLE, PAUSED, RUNNING, CountdownTimer


@pytest.fixture
def expiries():
    return []


@pytest.fixture
def countdown(scheduler, expiries):
    return CountdownTimer(scheduler, length_minutes=5, on_expire=expiries.append)


class TestCountdown:
    def test_initial_state(self, countdown):
        assert countdown.state == IDLE
        assert countdown.remaining == 300
        assert countdown.formatted == "05:00"

    def test_299_ticks_do_not_expire(self, countdown, scheduler, expiries):
        countdown.start()
        scheduler.advance(299)
        assert countdown.remaining == 1
        assert countdown.state == RUNNING
        assert expiries == []

    def test_300_ticks_expire_exactly_once(self, countdown, scheduler, expiries):
        countdown.start()
        scheduler.advance(300)
        assert countdown.state == EXPIRED
        assert countdown.remaining == 0
        scheduler.advance(600)
        assert expiries == [countdown]
        assert scheduler.pending == []

    def test_toggle_pauses_and_keeps_remaining(self, countdown, scheduler):
        countdown.toggle()
        scheduler.advance(10)
        countdown.toggle()
        assert countdown.state == PAUSED
        scheduler.advance(10)
        assert countdown.remaining == 290
        countdown.toggle()
        scheduler.advance(5)
        assert countdown.remaining == 285

    def test_toggle_expired_is_noop(self, countdown, scheduler, expiries):
        countdown.start()
        scheduler.advance(300)
        assert not countdown.toggle()
        scheduler.advance(10)
        assert countdown.state == EXPIRED
        assert len(expiries) == 1

    def test_reset_restores_full_length(self, countdown, scheduler):
        countdown.start()
        scheduler.advance(42)
        countdown.reset()
        assert countdown.state == IDLE
        assert countdown.remaining == 300
        scheduler.advance(10)
        assert countdown.remaining == 300

    def test_elapsed_fraction(self, countdown, scheduler):
        countdown.start()
        scheduler.advance(150)
        assert countdown.elapsed_fraction == 0.5


class TestSessionLength:
    def test_rejected_while_running(self, countdown, scheduler):
        countdown.start()
        scheduler.advance(5)
        assert not countdown.set_length(30)
        assert countdown.length_minutes == 5
        assert countdown.remaining == 295

    def test_while_paused_resets_remaining(self, countdown, scheduler):
        countdown.start()
        scheduler.advance(5)
        countdown.pause()
        assert countdown.set_length(10)
        assert countdown.remaining == 600
        assert countdown.state == IDLE

    @pytest.mark.parametrize("requested,expected", [(1, 5), (90, 60), (45, 45)])
    def test_clamped(self, countdown, requested, expected):
        countdown.set_length(requested)
        assert countdown.length_minutes == expected
