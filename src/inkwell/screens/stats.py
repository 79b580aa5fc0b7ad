"""Statistics screen with genre progress, challenges and recent sessions."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Static

from ..stats import format_duration, genre_progress, reading_challenges


def _bar(percentage: float, width: int = 20) -> str:
    filled = int(round(min(100.0, percentage) / 100 * width))
    return "█" * filled + "░" * (width - filled)


class StatsScreen(Screen):
    """Reading statistics overview."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="stats-container"):
            yield Static("", id="stats-panel")
        yield Footer()

    def on_mount(self) -> None:
        reading = self.app.reading
        library = reading.library
        stats = reading.compute_statistics()
        genres = genre_progress(library.books)

        lines = [
            "[bold]Reading Statistics[/bold]",
            "",
            f"Books read         {stats.books_read}",
            f"Pages read         {stats.pages_read}",
            f"Hours reading      {stats.total_time_hours}",
            f"Average rating     {stats.average_rating}",
            f"Currently reading  {stats.currently_reading}",
            f"To read            {stats.to_read}",
            "",
            "[#d4a04a]Reading Progress by Genre[/#d4a04a]",
        ]
        for g in genres:
            lines.append(f"{g.genre:<22} {_bar(g.percentage)} {g.completed}/{g.total} books")

        lines += ["", "[#d4a04a]Reading Challenges[/#d4a04a]"]
        for c in reading_challenges(stats, len(genres)):
            lines.append(f"{c.title:<34} {_bar(c.percentage)} {c.current}/{c.target}")

        sessions = library.recent_sessions()
        if sessions:
            lines += ["", "[#d4a04a]Recent Reading Sessions[/#d4a04a]"]
            for s in sessions:
                detail = f"{s.date:%b %d, %Y} · {format_duration(s.duration)}"
                if s.pages_read:
                    detail += f" · {s.pages_read} pages"
                lines.append(f"{library.book_title(s.book_id)}  [#8a7e6a]{detail}[/#8a7e6a]")

        self.query_one("#stats-panel", Static).update("\n".join(lines))

    def action_go_back(self) -> None:
        self.app.pop_screen()
