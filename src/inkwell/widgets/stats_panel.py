"""Stats panel widget displaying a reading summary.

Shows the application version, book count, books read, pages read, hours
spent reading and the active filters.
"""

from textual.widgets import Static

from ..stats import Statistics


class StatsPanel(Static):
    """Single-line stats bar at the top of the library screen."""

    def update_stats(
        self,
        version: str,
        book_count: int,
        stats: Statistics,
        filters: str = "",
    ) -> None:
        """Refresh the stats bar content.

        Parameters
        ----------
        version : str
            Application version string (e.g. ``"0.1.0"``).
        book_count : int
            Total number of books in the library.
        stats : Statistics
            Current reading statistics.
        filters : str, optional
            Description of the active status/genre filters.
        """
        line = (
            f"[bold]Inkwell {version}[/bold]  |  "
            f"{book_count} books, {stats.books_read} read, "
            f"{stats.pages_read} pages  |  "
            f"{stats.total_time_hours}h reading  |  "
            f"avg rating {stats.average_rating}"
        )
        if filters:
            line += f"  |  {filters}"
        self.update(line)
