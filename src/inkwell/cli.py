"""CLI entry point for the Inkwell reading companion."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import click

from . import __version__, ui
from .activity_log import ActivityLog
from .library import Library
from .logger import configure_logging
from .models import BOOK_STATUSES, BookDraft, QuoteDraft
from .settings import Settings, load_settings
from .stats import (
    ALL,
    compute_statistics,
    filter_books,
    genre_progress,
    reading_challenges,
    unique_genres,
)
from .storage import SqliteStorage
from .store import PersistentStore


def _split_tags(value: Optional[str]) -> list[str]:
    if not value:
        return []
    return [t.strip() for t in value.split(",")]


@contextmanager
def _open_library(ctx: click.Context) -> Iterator[Library]:
    """Open the library configured for this invocation and close it after."""
    settings: Settings = ctx.obj["settings"]
    db_path = ctx.obj["db_path"] or settings.resolve_db_path()
    storage = SqliteStorage(db_path)
    try:
        yield Library.open(
            PersistentStore(storage),
            activity_log=settings.resolve_activity_log(),
            source="cli",
        )
    finally:
        storage.close()


@click.group(invoke_without_command=True)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="INKWELL_SETTINGS",
    help="Settings file to use instead of ~/.inkwell/inkwell-settings.json",
)
@click.option("--db", "db_path", type=click.Path(dir_okay=False, path_type=Path), help="Database file")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    settings_path: Optional[Path],
    db_path: Optional[Path],
    verbose: bool,
) -> None:
    """Inkwell - your personal reading companion."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = load_settings(settings_path)
    ctx.obj["db_path"] = db_path
    if ctx.invoked_subcommand is None:
        from .app import InkwellApp

        InkwellApp(settings=ctx.obj["settings"], db_path=db_path).run()


@main.command("list")
@click.option("--search", "-s", default="", help="Match title or author")
@click.option("--status", type=click.Choice((ALL,) + BOOK_STATUSES), default=ALL)
@click.option("--genre", "-g", default=ALL, help="Filter by genre")
@click.pass_context
def list_cmd(ctx: click.Context, search: str, status: str, genre: str) -> None:
    """List books in the library."""
    with _open_library(ctx) as library:
        ui.display_book_table(filter_books(library.books, search, status, genre))


@main.command("stats")
@click.pass_context
def stats_cmd(ctx: click.Context) -> None:
    """Show reading statistics."""
    with _open_library(ctx) as library:
        stats = compute_statistics(library.books)
        genres = genre_progress(library.books)
        ui.display_stats(stats, genres, reading_challenges(stats, len(genres)))


@main.command("genres")
@click.pass_context
def genres_cmd(ctx: click.Context) -> None:
    """List the genres in the library."""
    with _open_library(ctx) as library:
        genres = unique_genres(library.books)
    if not genres:
        ui.print_info("No genres yet.")
    for genre in genres:
        ui.console.print(genre)


@main.command("info")
@click.argument("book_id", type=int)
@click.pass_context
def info_cmd(ctx: click.Context, book_id: int) -> None:
    """Show detailed info for a book."""
    with _open_library(ctx) as library:
        book = library.get_book(book_id)
        if book:
            ui.display_book_info(
                book, library.quotes_for_book(book_id), library.sessions_for_book(book_id)
            )
        else:
            ui.print_error(f"No book found with id: {book_id}")


@main.command("add")
@click.argument("title")
@click.argument("author")
@click.option("--genre", "-g", default="")
@click.option("--pages", "-p", type=click.IntRange(min=0), default=0)
@click.option("--excerpt", default="")
@click.option("--notes", default="")
@click.option("--tags", help="Comma-separated tags")
@click.pass_context
def add_cmd(
    ctx: click.Context,
    title: str,
    author: str,
    genre: str,
    pages: int,
    excerpt: str,
    notes: str,
    tags: Optional[str],
) -> None:
    """Add a book to the library."""
    draft = BookDraft(
        title=title,
        author=author,
        genre=genre,
        excerpt=excerpt,
        pages=pages,
        notes=notes,
        tags=_split_tags(tags),
    )
    with _open_library(ctx) as library:
        book = library.add_book(draft)
    if book:
        ui.print_success(f"Added: {book.display_title(60)} (id {book.id})")
    else:
        ui.print_skip("Title and author are required; nothing added.")


@main.command("update")
@click.argument("book_id", type=int)
@click.option("--title")
@click.option("--author")
@click.option("--genre")
@click.option("--pages", type=click.IntRange(min=0))
@click.option("--status", type=click.Choice(BOOK_STATUSES))
@click.option("--progress", type=int)
@click.option("--rating", type=int)
@click.option("--notes")
@click.option("--tags", help="Comma-separated tags")
@click.pass_context
def update_cmd(ctx: click.Context, book_id: int, **options) -> None:
    """Update fields of a book."""
    updates = {k: v for k, v in options.items() if v is not None}
    if "progress" in updates:
        updates["reading_progress"] = updates.pop("progress")
    if "tags" in updates:
        updates["tags"] = _split_tags(updates["tags"])
    if not updates:
        ui.print_info("Nothing to update.")
        return
    with _open_library(ctx) as library:
        try:
            book = library.update_book_fields(book_id, updates)
        except ValueError as e:
            ui.print_error(str(e))
            ctx.exit(1)
    if book:
        ui.print_success(f"Updated: {book.display_title(60)}")
    else:
        ui.print_error(f"No book found with id: {book_id}")


@main.command("delete")
@click.argument("book_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_cmd(ctx: click.Context, book_id: int, yes: bool) -> None:
    """Delete a book. Its quotes and sessions are kept."""
    with _open_library(ctx) as library:
        book = library.get_book(book_id)
        if book is None:
            ui.print_error(f"No book found with id: {book_id}")
            return
        if not yes and not click.confirm(f"Delete '{book.title}'?"):
            return
        library.delete_book(book_id)
    ui.print_success(f"Deleted: {book.display_title(60)}")


@main.command("quotes")
@click.option("--book", "book_id", type=int, help="Only quotes linked to this book id")
@click.pass_context
def quotes_cmd(ctx: click.Context, book_id: Optional[int]) -> None:
    """List saved quotes."""
    with _open_library(ctx) as library:
        quotes = library.quotes_for_book(book_id) if book_id is not None else library.quotes
        ui.display_quotes(quotes)


@main.command("quote-add")
@click.argument("text")
@click.argument("author")
@click.option("--source", default="", help="Title of the source book")
@click.option("--book", "book_id", type=int, help="Link to a book id")
@click.option("--page", type=click.IntRange(min=1))
@click.option("--tags", help="Comma-separated tags")
@click.pass_context
def quote_add_cmd(
    ctx: click.Context,
    text: str,
    author: str,
    source: str,
    book_id: Optional[int],
    page: Optional[int],
    tags: Optional[str],
) -> None:
    """Save a quote."""
    with _open_library(ctx) as library:
        if book_id is not None and not source:
            source = library.book_title(book_id)
        quote = library.add_quote(
            QuoteDraft(
                text=text,
                author=author,
                book=source,
                book_id=book_id,
                page=page,
                tags=_split_tags(tags),
            )
        )
    if quote:
        ui.print_success("Quote saved.")
    else:
        ui.print_skip("Text and author are required; nothing saved.")


@main.command("sessions")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=5)
@click.pass_context
def sessions_cmd(ctx: click.Context, limit: int) -> None:
    """Show recent reading sessions."""
    with _open_library(ctx) as library:
        sessions = library.recent_sessions(limit)
        titles = {s.book_id: library.book_title(s.book_id) for s in sessions}
        ui.display_sessions(sessions, titles)


@main.command("activity")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=20)
@click.pass_context
def activity_cmd(ctx: click.Context, limit: int) -> None:
    """Show recent library changes."""
    log_path = ctx.obj["settings"].resolve_activity_log()
    if log_path is None:
        ui.print_info("Activity log is disabled.")
        return
    ui.display_activity(ActivityLog(log_path).recent(limit))


if __name__ == "__main__":
    main()
