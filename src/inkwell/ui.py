"""Rich UI components for the Inkwell CLI."""

from typing import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .activity_log import ActivityEntry
from .models import Book, Quote, ReadingSession
from .stats import (
    Challenge,
    GenreProgress,
    Statistics,
    format_duration,
)

console = Console()

BROWSE_MAX_WIDTH = 80

_STATUS_STYLE = {
    "to-read": "dim",
    "reading": "cyan",
    "completed": "green",
    "paused": "yellow",
}


def _browse_width() -> int:
    return min(console.width, BROWSE_MAX_WIDTH)


def print_success(message: str) -> None:
    """Print a success message with checkmark."""
    console.print(f"[green]✓[/green] {message}")


def print_skip(message: str) -> None:
    """Print a skip message with circle."""
    console.print(f"[dim]○[/dim] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def format_status(status: str) -> str:
    style = _STATUS_STYLE.get(status, "white")
    return f"[{style}]{status}[/{style}]"


def format_rating(rating) -> str:
    if not rating:
        return ""
    return "★" * rating + "☆" * (5 - rating)


def display_book_table(books: Iterable[Book], max_rows: int = 50) -> None:
    """Display books in a table format."""
    table = Table(show_header=True, header_style="dim", box=None, padding=(0, 2))
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="white", no_wrap=False, max_width=40)
    table.add_column("Author", style="dim", no_wrap=False, max_width=25)
    table.add_column("Genre", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Progress", justify="right", no_wrap=True)

    count = 0
    for book in books:
        table.add_row(
            str(book.id),
            book.display_title(40),
            book.display_author(25),
            book.genre,
            format_status(book.status),
            f"{book.reading_progress}%",
        )
        count += 1
        if count >= max_rows:
            break

    console.print(table)

    if count == 0:
        print_info("No books found.")
    elif count == max_rows:
        print_info(f"Showing first {max_rows} books. Use --search to filter.")


def display_stats(
    stats: Statistics,
    genres: list[GenreProgress],
    challenges: list[Challenge],
) -> None:
    """Display reading statistics, genre progress and challenges."""
    console.print(f"Books read:        [bold]{stats.books_read}[/bold]")
    console.print(f"Pages read:        [bold]{stats.pages_read}[/bold]")
    console.print(f"Hours reading:     [bold]{stats.total_time_hours}[/bold]")
    console.print(f"Average rating:    [bold]{stats.average_rating}[/bold]")
    console.print(f"Currently reading: [bold]{stats.currently_reading}[/bold]")
    console.print(f"To read:           [bold]{stats.to_read}[/bold]\n")

    if genres:
        console.print("[dim]By Genre:[/dim]")
        for g in genres:
            console.print(f"  {g.genre:<20} {g.completed:>3}/{g.total:<3} {g.percentage:>5.0f}%")
        console.print()

    if challenges:
        console.print("[dim]Challenges:[/dim]")
        for c in challenges:
            mark = "[green]✓[/green]" if c.achieved else " "
            console.print(f"  {mark} {c.title:<32} {c.current}/{c.target} ({c.percentage}%)")


def display_book_info(book: Book, quotes: list[Quote], sessions: list[ReadingSession]) -> None:
    """Display detailed book information."""
    lines = []

    def add_field(label: str, value: str) -> None:
        if value:
            lines.append(f"[dim]{label}:[/dim] {value}")

    lines.append(f"[bold]{book.title}[/bold]")
    lines.append(f"[dim]by[/dim] {book.author}")
    lines.append("")

    add_field("Genre", book.genre)
    if book.pages:
        add_field("Pages", str(book.pages))
    add_field("Status", format_status(book.status))
    add_field("Progress", f"{book.reading_progress}%")
    add_field("Time spent", format_duration(book.time_spent_minutes))
    add_field("Rating", format_rating(book.rating))
    if book.tags:
        add_field("Tags", ", ".join(book.tags))

    if book.notes:
        lines.append("")
        lines.append("[dim]Notes:[/dim]")
        lines.append(book.notes)

    if quotes:
        lines.append("")
        lines.append(f"[dim]{len(quotes)} quote(s) saved[/dim]")
    if sessions:
        total = sum(s.duration for s in sessions)
        lines.append(f"[dim]{len(sessions)} session(s), {format_duration(total)}[/dim]")

    lines.append("")
    lines.append(f"[dim]Added: {book.date_added}[/dim]")
    if book.date_started:
        lines.append(f"[dim]Started: {book.date_started}[/dim]")
    if book.date_finished and book.is_completed:
        lines.append(f"[dim]Finished: {book.date_finished}[/dim]")

    panel = Panel(
        "\n".join(lines),
        title="[dim]Book Details[/dim]",
        title_align="left",
        border_style="dim",
        width=_browse_width(),
        padding=(1, 2),
    )
    console.print(panel)


def display_quotes(quotes: Iterable[Quote]) -> None:
    """Display quotes, one block per quote."""
    count = 0
    for quote in quotes:
        source = f" [italic]{quote.book}[/italic]" if quote.book else ""
        page = f", p. {quote.page}" if quote.page else ""
        console.print(f'"{quote.text}"')
        console.print(f"  [dim]— {quote.author}{source}{page}  ({quote.date_added})[/dim]")
        if quote.tags:
            console.print(f"  [cyan]{' '.join('#' + t for t in quote.tags)}[/cyan]")
        console.print()
        count += 1
    if count == 0:
        print_info("No quotes saved.")


def display_sessions(sessions: Iterable[ReadingSession], titles: dict[int, str]) -> None:
    """Display reading sessions with their resolved book titles."""
    table = Table(show_header=True, header_style="dim", box=None, padding=(0, 2))
    table.add_column("Date", style="dim", no_wrap=True)
    table.add_column("Book", style="white", max_width=40)
    table.add_column("Duration", justify="right", no_wrap=True)
    table.add_column("Pages", justify="right", no_wrap=True)

    count = 0
    for session in sessions:
        table.add_row(
            session.date.strftime("%b %d, %Y"),
            titles.get(session.book_id, ""),
            format_duration(session.duration),
            str(session.pages_read) if session.pages_read else "",
        )
        count += 1

    if count == 0:
        print_info("No reading sessions yet.")
        return
    console.print(table)


def display_activity(entries: list[ActivityEntry]) -> None:
    """Display activity log entries, newest first."""
    if not entries:
        print_info("No activity recorded.")
        return
    table = Table(show_header=True, header_style="dim", box=None, padding=(0, 2))
    table.add_column("When", style="dim", no_wrap=True)
    table.add_column("Action", style="cyan", no_wrap=True)
    table.add_column("Source", style="dim", no_wrap=True)
    table.add_column("Book", max_width=40)
    for entry in entries:
        table.add_row(
            entry.timestamp[:19].replace("T", " "),
            entry.action,
            entry.source,
            entry.title or "",
        )
    console.print(table)
