"""Library screen with stats, search, filters and the book table.

This is the default screen shown on launch. Keys: ``/`` search, ``s``
cycle status filter, ``g`` cycle genre filter, ``r`` read the highlighted
book, ``o`` quotes, ``t`` statistics, ``a`` about, ``q`` quit, Enter for
book details.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Input

from .. import __version__
from ..models import BOOK_STATUSES
from ..stats import ALL
from ..widgets.book_table import BookTable
from ..widgets.stats_panel import StatsPanel


def _cycle(options: list[str], current: str) -> str:
    """Return the option after *current*, wrapping around."""
    if current not in options:
        return options[0]
    return options[(options.index(current) + 1) % len(options)]


class LibraryScreen(Screen):
    """Default screen showing stats, search, and a filterable book table."""

    BINDINGS = [
        Binding("slash", "focus_search", "Search", key_display="/"),
        Binding("s", "cycle_status", "Status"),
        Binding("g", "cycle_genre", "Genre"),
        Binding("r", "read", "Read"),
        Binding("o", "quotes", "Quotes"),
        Binding("t", "stats", "Stats"),
        Binding("a", "about", "About"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._status = ALL
        self._genre = ALL

    def compose(self) -> ComposeResult:
        """Build the screen layout: stats, search input, book table, footer."""
        yield StatsPanel()
        yield Input(placeholder="Search by title or author...", id="search-input")
        yield BookTable()
        yield Footer()

    def on_mount(self) -> None:
        """Load data and focus the book table on first mount."""
        self._refresh_data()
        self._focus_table()

    def on_screen_resume(self) -> None:
        """Refresh data when returning from another screen."""
        self._refresh_data()
        self._focus_table()

    def _focus_table(self) -> None:
        """Move keyboard focus to the inner ``DataTable``."""
        self.query_one(BookTable).query_one(DataTable).focus()

    def _filters_label(self) -> str:
        parts = []
        if self._status != ALL:
            parts.append(f"status: {self._status}")
        if self._genre != ALL:
            parts.append(f"genre: {self._genre}")
        return ", ".join(parts)

    def _refresh_data(self) -> None:
        """Recompute stats and re-apply the search and filters."""
        reading = self.app.reading
        self.query_one(StatsPanel).update_stats(
            __version__,
            len(reading.library.books),
            reading.compute_statistics(),
            self._filters_label(),
        )
        query = self.query_one("#search-input", Input).value
        books = reading.filter_books(query, self._status, self._genre)
        book_table = self.query_one(BookTable)
        book_table.load_books(books)
        if reading.selected_id is not None:
            book_table.select_by_id(reading.selected_id)

    def on_input_changed(self, event: Input.Changed) -> None:
        """Re-filter whenever the search input text changes."""
        if event.input.id == "search-input":
            self._refresh_data()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Move focus from the search input to the table on Enter."""
        if event.input.id == "search-input":
            self._focus_table()

    def on_key(self, event) -> None:
        """Handle Escape: move focus from search to table, or clear search."""
        if event.key == "escape":
            focused = self.app.focused
            if isinstance(focused, Input):
                self._focus_table()
                event.prevent_default()
            elif isinstance(focused, DataTable):
                search_input = self.query_one("#search-input", Input)
                if search_input.value.strip():
                    search_input.value = ""
                    event.prevent_default()

    def action_focus_search(self) -> None:
        """Focus the search input (bound to ``/``)."""
        self.query_one("#search-input", Input).focus()

    def action_cycle_status(self) -> None:
        """Step through the status filters (bound to ``s``)."""
        self._status = _cycle([ALL, *BOOK_STATUSES], self._status)
        self._refresh_data()

    def action_cycle_genre(self) -> None:
        """Step through the genres present in the library (bound to ``g``)."""
        self._genre = _cycle([ALL, *self.app.reading.unique_genres()], self._genre)
        self._refresh_data()

    def on_book_table_book_selected(self, event: BookTable.BookSelected) -> None:
        """Open the book detail screen for the selected book."""
        from .book_detail import BookDetailScreen
        self.app.push_screen(BookDetailScreen(book_id=event.book_id))

    def action_read(self) -> None:
        """Select the highlighted book and open the reader (bound to ``r``)."""
        book_id = self.query_one(BookTable).get_selected_id()
        if book_id is None:
            self.notify("No book highlighted", severity="warning")
            return
        from .reader import ReaderScreen
        if book_id != self.app.reading.selected_id:
            self.app.reading.select_book(book_id)
        self.app.push_screen(ReaderScreen())

    def action_quotes(self) -> None:
        """Push the quotes screen (bound to ``o``)."""
        from .quotes import QuotesScreen
        self.app.push_screen(QuotesScreen())

    def action_stats(self) -> None:
        """Push the statistics screen (bound to ``t``)."""
        from .stats import StatsScreen
        self.app.push_screen(StatsScreen())

    def action_about(self) -> None:
        """Push the about screen (bound to ``a``)."""
        from .about import AboutScreen
        self.app.push_screen(AboutScreen())

    def action_quit(self) -> None:
        """Exit the application (bound to ``q``)."""
        self.app.exit()
