"""Book table widget with id tracking and sortable columns."""

from textual.message import Message
from textual.widgets import DataTable, Static

from ..models import Book

# Column key -> sort key function
_COLUMN_SORT_KEY = {
    "title": lambda b: b.title.lower(),
    "author": lambda b: b.author.lower(),
    "genre": lambda b: b.genre.lower(),
    "status": lambda b: b.status,
    "progress": lambda b: b.reading_progress,
}

# Column key -> (base label, sort shortcut key)
_COLUMNS = {
    "title": ("Title", "F1"),
    "author": ("Author", "F2"),
    "genre": ("Genre", "F3"),
    "status": ("Status", "F4"),
    "progress": ("Read", "F5"),
}

# Keyboard key -> column key
_KEY_TO_COLUMN = {info[1].lower(): col for col, info in _COLUMNS.items()}


class BookTable(Static):
    """DataTable wrapper that tracks the book id per row and emits BookSelected messages.

    Rows keep the library's insertion order until a column is sorted.
    """

    class BookSelected(Message):
        """Emitted when a book row is selected."""

        def __init__(self, book_id: int) -> None:
            self.book_id = book_id
            super().__init__()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._id_map: dict = {}  # row_key -> book id
        self._columns_added = False
        self._books: list[Book] = []
        self._sort_column: str | None = None
        self._sort_reverse: bool = False

    def compose(self):
        yield DataTable()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"

    def _ensure_columns(self) -> None:
        """Add columns sized to the terminal width."""
        if self._columns_added:
            return
        self._columns_added = True
        table = self.query_one(DataTable)
        width = self.app.size.width - 2
        self._w_title = max(30, int(width * 0.38))
        self._w_author = max(20, int(width * 0.22))
        table.add_column(self._header("title"), width=self._w_title, key="title")
        table.add_column(self._header("author"), width=self._w_author, key="author")
        table.add_column(self._header("genre"), width=max(12, int(width * 0.16)), key="genre")
        table.add_column(self._header("status"), width=max(10, int(width * 0.12)), key="status")
        table.add_column(self._header("progress"), width=max(8, int(width * 0.08)), key="progress")

    def _header(self, col_key: str) -> str:
        """Build a column header string with sort key hint and indicator."""
        base, shortcut = _COLUMNS[col_key]
        indicator = ""
        if col_key == self._sort_column:
            indicator = " ▼" if self._sort_reverse else " ▲"
        return f"{base} [{shortcut}]{indicator}"

    def load_books(self, books: list[Book]) -> None:
        """Populate the table, keeping the current sort column if any."""
        self._books = list(books)
        self._sort_and_reload()

    def _sort_and_reload(self) -> None:
        """Sort stored books and repopulate the table rows."""
        table = self.query_one(DataTable)
        self._ensure_columns()
        table.clear()
        self._id_map.clear()

        books = self._books
        if self._sort_column is not None:
            books = sorted(
                books, key=_COLUMN_SORT_KEY[self._sort_column], reverse=self._sort_reverse
            )

        title_max = getattr(self, "_w_title", 60)
        author_max = getattr(self, "_w_author", 30)
        for book in books:
            row_key = table.add_row(
                book.display_title(title_max),
                book.display_author(author_max),
                book.genre,
                book.status,
                f"{book.reading_progress}%",
            )
            self._id_map[row_key] = book.id

        self._update_column_labels()

    def _update_column_labels(self) -> None:
        """Refresh all column headers with current sort indicator."""
        from rich.text import Text
        from textual.widgets._data_table import ColumnKey

        table = self.query_one(DataTable)
        for col_key in _COLUMNS:
            column = table.columns.get(ColumnKey(col_key))
            if column is not None:
                column.label = Text(self._header(col_key))
        table.refresh()

    def _sort_by(self, col_key: str) -> None:
        """Sort by the given column, toggling direction if already active."""
        if col_key == self._sort_column:
            self._sort_reverse = not self._sort_reverse
        else:
            self._sort_column = col_key
            self._sort_reverse = False
        self._sort_and_reload()

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        """Sort table when a column header is clicked."""
        col_key = str(event.column_key.value)
        if col_key in _COLUMN_SORT_KEY:
            self._sort_by(col_key)

    def on_key(self, event) -> None:
        """Handle F1-F5 sort shortcuts when the table has focus."""
        col_key = _KEY_TO_COLUMN.get(event.key)
        if col_key is not None and self._books:
            self._sort_by(col_key)
            event.prevent_default()

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Forward row selection as BookSelected message."""
        book_id = self._id_map.get(event.row_key)
        if book_id is not None:
            self.post_message(self.BookSelected(book_id))

    def get_selected_id(self) -> int | None:
        """Return the id of the currently highlighted row."""
        table = self.query_one(DataTable)
        keys = list(self._id_map.keys())
        if table.cursor_row is not None and 0 <= table.cursor_row < len(keys):
            return self._id_map[keys[table.cursor_row]]
        return None

    def select_by_id(self, book_id: int) -> None:
        """Move the cursor to the row with the given book id."""
        table = self.query_one(DataTable)
        for idx, stored_id in enumerate(self._id_map.values()):
            if stored_id == book_id:
                table.move_cursor(row=idx)
                break
