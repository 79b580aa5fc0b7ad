"""Quotes screen listing saved quotes."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Static


class QuotesScreen(Screen):
    """Scrollable list of saved quotes."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="quotes-container"):
            yield Static("", id="quotes-panel")
        yield Footer()

    def on_mount(self) -> None:
        quotes = self.app.reading.library.quotes
        if not quotes:
            self.query_one("#quotes-panel", Static).update("[#8a7e6a]No quotes saved.[/#8a7e6a]")
            return
        lines = [f"[bold]Your Favorite Quotes ({len(quotes)})[/bold]", ""]
        for quote in quotes:
            lines.append(f'"{quote.text}"')
            meta = f"— {quote.author}"
            if quote.book:
                meta += f"  [italic]{quote.book}[/italic]"
            if quote.page:
                meta += f"  Page {quote.page}"
            lines.append(f"[#8a7e6a]{meta}  ·  {quote.date_added}[/#8a7e6a]")
            if quote.tags:
                lines.append("[#d4a04a]" + " ".join(f"#{t}" for t in quote.tags) + "[/#d4a04a]")
            lines.append("")
        self.query_one("#quotes-panel", Static).update("\n".join(lines))

    def action_go_back(self) -> None:
        self.app.pop_screen()
