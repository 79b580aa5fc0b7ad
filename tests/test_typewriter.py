"""Tests for the typewriter excerpt player."""

import pytest

from inkwell.typewriter import COMPLETE, IDLE, PAUSED, PLAYING, Typewriter

STEP = 0.1  # default speed, 100 ms per character


@pytest.fixture
def typewriter(scheduler):
    return Typewriter(scheduler)


class TestStart:
    def test_requires_excerpt(self, typewriter, scheduler):
        assert not typewriter.start()
        assert typewriter.state == IDLE
        assert scheduler.pending == []

    def test_empty_excerpt_completes_without_steps(self, typewriter, scheduler):
        typewriter.load("")
        assert typewriter.start()
        assert typewriter.state == COMPLETE
        assert typewriter.revealed == ""
        assert scheduler.pending == []

    def test_complete_is_terminal_until_reset(self, typewriter, scheduler):
        typewriter.load("ab")
        typewriter.start()
        scheduler.advance(1)
        assert typewriter.state == COMPLETE
        assert not typewriter.start()
        typewriter.reset()
        assert typewriter.start()


class TestStepping:
    def test_one_character_per_step(self, typewriter, scheduler):
        text = "Hello"
        typewriter.load(text)
        typewriter.start()
        lengths = []
        for _ in range(len(text)):
            scheduler.advance(STEP)
            lengths.append(len(typewriter.revealed))
        assert lengths == [1, 2, 3, 4, 5]
        assert typewriter.revealed == text
        assert typewriter.state == COMPLETE

    def test_stays_fixed_after_complete(self, typewriter, scheduler):
        typewriter.load("Hi")
        typewriter.start()
        scheduler.advance(5)
        assert typewriter.revealed == "Hi"
        assert typewriter.cursor == 2
        assert scheduler.pending == []

    def test_nothing_revealed_before_delay(self, typewriter, scheduler):
        typewriter.load("Hi")
        typewriter.start()
        scheduler.advance(0.05)
        assert typewriter.revealed == ""

    def test_progress(self, typewriter, scheduler):
        typewriter.load("abcd")
        typewriter.start()
        scheduler.advance(2 * STEP)
        assert typewriter.progress == 50


class TestPauseReset:
    def test_pause_keeps_cursor_and_stops_steps(self, typewriter, scheduler):
        typewriter.load("abcdef")
        typewriter.start()
        scheduler.advance(3 * STEP)
        assert typewriter.pause()
        assert typewriter.state == PAUSED
        scheduler.advance(1)
        assert typewriter.revealed == "abc"
        typewriter.start()
        scheduler.advance(STEP)
        assert typewriter.revealed == "abcd"

    def test_pause_when_not_playing(self, typewriter):
        assert not typewriter.pause()

    def test_reset_mid_playback(self, typewriter, scheduler):
        typewriter.load("abcdef")
        typewriter.start()
        scheduler.advance(2 * STEP)
        typewriter.reset()
        assert typewriter.revealed == ""
        assert typewriter.cursor == 0
        assert typewriter.state == IDLE
        assert scheduler.pending == []

    def test_load_forces_reset(self, typewriter, scheduler):
        typewriter.load("abcdef")
        typewriter.start()
        scheduler.advance(2 * STEP)
        typewriter.load("xyz")
        assert typewriter.cursor == 0
        assert typewriter.state == IDLE
        typewriter.start()
        scheduler.advance(STEP)
        assert typewriter.revealed == "x"


class TestSpeed:
    @pytest.mark.parametrize("requested,expected", [(5, 20), (500, 200), (60, 60)])
    def test_clamped(self, typewriter, requested, expected):
        typewriter.speed = requested
        assert typewriter.speed == expected

    def test_live_change_reschedules(self, typewriter, scheduler):
        typewriter.load("abcdef")
        typewriter.start()
        typewriter.speed = 20
        scheduler.advance(0.02)
        assert typewriter.revealed == "a"
        assert len(scheduler.pending) == 1
        assert typewriter.state == PLAYING

    def test_on_change_called(self, scheduler):
        seen = []
        typewriter = Typewriter(scheduler, on_change=lambda t: seen.append(t.cursor))
        typewriter.load("ab")
        typewriter.start()
        scheduler.advance(1)
        assert seen[-2:] == [1, 2]
