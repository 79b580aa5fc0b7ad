"""Book detail screen showing full book information."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Static

from ..library import Library
from ..models import STATUS_COMPLETED, STATUS_PAUSED, STATUS_READING, Book
from ..stats import format_duration


def _format_book_info(book: Book, library: Library) -> str:
    """Format full book info as Rich markup text."""
    lines = []

    lines.append(f"[bold]{book.title}[/bold]")
    lines.append(f"[#8a7e6a]by[/#8a7e6a] {book.author}")
    lines.append("")

    def add_field(label: str, value: str) -> None:
        if value:
            lines.append(f"[#8a7e6a]{label}:[/#8a7e6a] {value}")

    add_field("Genre", book.genre)
    if book.pages:
        add_field("Pages", str(book.pages))
    add_field("Status", book.status)
    add_field("Progress", f"{book.reading_progress}%")
    add_field("Time spent", format_duration(book.time_spent_minutes))
    if book.rating:
        add_field("Rating", "★" * book.rating + "☆" * (5 - book.rating))
    if book.tags:
        add_field("Tags", ", ".join(book.tags))

    if book.notes:
        lines.append("")
        lines.append("[#8a7e6a]Notes:[/#8a7e6a]")
        lines.append(book.notes)

    quotes = library.quotes_for_book(book.id)
    if quotes:
        lines.append("")
        lines.append("[#8a7e6a]Quotes:[/#8a7e6a]")
        for quote in quotes:
            lines.append(f'"{quote.text}"')

    sessions = library.sessions_for_book(book.id)
    if sessions:
        lines.append("")
        total = format_duration(sum(s.duration for s in sessions))
        lines.append(f"[#8a7e6a]{len(sessions)} timed session(s), {total}[/#8a7e6a]")

    lines.append("")
    lines.append(f"[#8a7e6a]Added: {book.date_added}[/#8a7e6a]")
    if book.date_started:
        lines.append(f"[#8a7e6a]Started: {book.date_started}[/#8a7e6a]")
    if book.date_finished and book.is_completed:
        lines.append(f"[#6a9a4a]Finished: {book.date_finished}[/#6a9a4a]")

    return "\n".join(lines)


class BookDetailScreen(Screen):
    """Full book information with quick status changes."""

    BINDINGS = [
        Binding("r", "mark('reading')", "Reading"),
        Binding("p", "mark('paused')", "Paused"),
        Binding("c", "mark('completed')", "Completed"),
        Binding("d", "delete", "Delete"),
        Binding("escape", "go_back", "Back"),
    ]

    def __init__(self, book_id: int) -> None:
        super().__init__()
        self.book_id = book_id

    def compose(self) -> ComposeResult:
        yield Static("", id="detail-panel")
        yield Footer()

    def on_mount(self) -> None:
        self._render_book()

    def _render_book(self) -> None:
        library = self.app.reading.library
        book = library.get_book(self.book_id)
        panel = self.query_one("#detail-panel", Static)
        if book:
            panel.update(_format_book_info(book, library))
        else:
            panel.update(f"[#c45a3a]No book found with id: {self.book_id}[/#c45a3a]")

    def action_mark(self, status: str) -> None:
        if status not in (STATUS_READING, STATUS_PAUSED, STATUS_COMPLETED):
            return
        book = self.app.reading.library.update_book_fields(self.book_id, {"status": status})
        if book:
            self.notify(f"Marked as {status}")
            self._render_book()

    def action_delete(self) -> None:
        if self.app.reading.delete_book(self.book_id):
            self.notify("Book deleted")
            self.app.pop_screen()

    def action_go_back(self) -> None:
        self.app.pop_screen()
