"""Textual TUI application for the Inkwell reading companion.

Defines the ``InkwellApp`` class (the Textual ``App`` subclass) and the
``main`` entry point used by the ``inkwell-tui`` console script. The app
itself is the scheduler behind every reader timer: ``set_timer`` and
``set_interval`` run their callbacks on the app's event loop.
"""

from pathlib import Path
from typing import Optional

from textual.app import App

from .context import ReadingContext
from .library import Library
from .logger import configure_logging
from .settings import Settings, load_settings
from .storage import SqliteStorage
from .store import PersistentStore


class InkwellApp(App):
    """Inkwell Reading Companion TUI.

    Manages the library and reading context lifecycle and pushes the
    initial ``LibraryScreen`` on mount.

    Parameters
    ----------
    settings : Settings, optional
        Settings to use; loaded from the settings file when omitted.
    db_path : Path, optional
        Database file overriding ``settings.db_path``.

    Attributes
    ----------
    reading : ReadingContext
        Shared reading context, available after mount.
    """

    TITLE = "Inkwell"
    SUB_TITLE = "Reading Companion"
    CSS_PATH = "inkwell.tcss"

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self, settings: Optional[Settings] = None, db_path: Optional[Path] = None
    ) -> None:
        super().__init__()
        self._settings = settings
        self._db_path = db_path

    def on_mount(self) -> None:
        """Open the library, build the reading context, and push the library screen."""
        if self._settings is None:
            self._settings = load_settings()
        settings = self._settings
        self.storage = SqliteStorage(self._db_path or settings.resolve_db_path())
        library = Library.open(
            PersistentStore(self.storage),
            activity_log=settings.resolve_activity_log(),
            source="tui",
        )
        self.reading = ReadingContext(
            library,
            self,
            session_length=settings.session_length,
            reading_speed=settings.reading_speed,
            accrual_interval=settings.accrual_interval,
        )
        from .screens.main import LibraryScreen
        self.push_screen(LibraryScreen())

    def on_unmount(self) -> None:
        """Stop every timer, flush the library and close the database."""
        if hasattr(self, "reading"):
            self.reading.close()
        if hasattr(self, "storage"):
            self.storage.close()


def main() -> None:
    """Entry point for the ``inkwell-tui`` console script."""
    configure_logging()
    app = InkwellApp()
    app.run()


if __name__ == "__main__":
    main()
