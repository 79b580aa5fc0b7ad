"""Reader screen with the typewriter, stopwatch and countdown timer.

Keys: ``space`` start/pause reading, ``x`` reset reading, ``+``/``-``
typewriter speed, ``t`` start/pause the countdown, ``z`` reset the
countdown, ``[``/``]`` session length, ``escape`` back to the library.
Timers keep running while the screen is hidden; only the display stops
updating.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Footer, ProgressBar, Static

from ..countdown import EXPIRED
from ..typewriter import COMPLETE, PLAYING

SPEED_STEP = 10
LENGTH_STEP = 5


class ReaderScreen(Screen):
    """Typewriter playback of the selected book's excerpt, with timers."""

    BINDINGS = [
        Binding("space", "toggle_reading", "Read/Pause"),
        Binding("x", "reset_reading", "Reset"),
        Binding("plus", "speed(-1)", "Faster", key_display="+"),
        Binding("minus", "speed(1)", "Slower", key_display="-"),
        Binding("t", "toggle_countdown", "Timer"),
        Binding("z", "reset_countdown", "Reset timer"),
        Binding("left_square_bracket", "length(-1)", "Shorter", key_display="["),
        Binding("right_square_bracket", "length(1)", "Longer", key_display="]"),
        Binding("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="reader-container"):
            yield Static("", id="reader-title")
            yield Static("", id="reader-text")
            yield ProgressBar(total=100, show_eta=False, id="reader-progress")
            yield Static("", id="reader-status")
            yield Static("", id="countdown-display")
            yield ProgressBar(total=100, show_eta=False, id="countdown-progress")
        yield Footer()

    def on_mount(self) -> None:
        self._attach()
        self._render_all()

    def on_screen_resume(self) -> None:
        self._attach()
        self._render_all()

    def on_screen_suspend(self) -> None:
        self._detach()

    def on_unmount(self) -> None:
        self._detach()

    def _attach(self) -> None:
        reading = self.app.reading
        reading.typewriter.on_change = lambda _t: self._render_text()
        reading.stopwatch.on_change = lambda _s: self._render_status()
        reading.countdown.on_change = lambda _c: self._render_countdown()

    def _detach(self) -> None:
        reading = self.app.reading
        reading.typewriter.on_change = None
        reading.stopwatch.on_change = None
        reading.countdown.on_change = None

    def _render_all(self) -> None:
        book = self.app.reading.selected_book
        title = f"[bold]{book.title}[/bold]  [#8a7e6a]by {book.author}[/#8a7e6a]" if book else ""
        self.query_one("#reader-title", Static).update(title or "[#8a7e6a]No book selected[/#8a7e6a]")
        self._render_text()
        self._render_status()
        self._render_countdown()

    def _render_text(self) -> None:
        typewriter = self.app.reading.typewriter
        cursor = "▌" if typewriter.state == PLAYING else ""
        self.query_one("#reader-text", Static).update(typewriter.revealed + cursor)
        self.query_one("#reader-progress", ProgressBar).update(progress=typewriter.progress)
        self._render_status()

    def _render_status(self) -> None:
        reading = self.app.reading
        typewriter = reading.typewriter
        state = typewriter.state
        if state == COMPLETE:
            state = "[#6a9a4a]complete[/#6a9a4a]"
        self.query_one("#reader-status", Static).update(
            f"{state}  |  speed {typewriter.speed} ms  |  "
            f"session {reading.stopwatch.formatted}"
        )

    def _render_countdown(self) -> None:
        countdown = self.app.reading.countdown
        line = (
            f"[bold]{countdown.formatted}[/bold]  "
            f"[#8a7e6a]{countdown.length_minutes} min session, {countdown.state}[/#8a7e6a]"
        )
        if countdown.state == EXPIRED:
            line += "  [#6a9a4a]Session complete! Great job reading![/#6a9a4a]"
        self.query_one("#countdown-display", Static).update(line)
        self.query_one("#countdown-progress", ProgressBar).update(
            progress=countdown.elapsed_fraction * 100
        )

    def action_toggle_reading(self) -> None:
        reading = self.app.reading
        was_running = reading.stopwatch.running
        if not reading.toggle_reading() and not was_running:
            self.notify("Select a book first", severity="warning")
        self._render_all()

    def action_reset_reading(self) -> None:
        self.app.reading.reset_reading()
        self._render_all()

    def action_speed(self, direction: int) -> None:
        reading = self.app.reading
        reading.set_reading_speed(reading.typewriter.speed + direction * SPEED_STEP)
        self._render_status()

    def action_toggle_countdown(self) -> None:
        if not self.app.reading.toggle_countdown():
            self.notify("Reset the timer to start a new session", severity="warning")
        self._render_countdown()

    def action_reset_countdown(self) -> None:
        self.app.reading.reset_countdown()
        self._render_countdown()

    def action_length(self, direction: int) -> None:
        reading = self.app.reading
        if not reading.set_session_length(reading.countdown.length_minutes + direction * LENGTH_STEP):
            self.notify("Pause the timer to change the session length", severity="warning")
        self._render_countdown()

    def action_go_back(self) -> None:
        self.app.pop_screen()
