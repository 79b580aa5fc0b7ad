"""About screen showing version and configuration paths."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Static

from .. import __version__

LOGO = """\
 ▀█▀ █▄ █ █▄▀ █   █ █▀▀ █   █
  █  █ ▀█ █ █ ▀▄▀▄▀ ██▄ █▄▄ █▄▄"""


class AboutScreen(Screen):
    """About dialog with logo, version, and settings location."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        """Display the logo, version, and config path."""
        yield Static(
            f"[#d4a04a]{LOGO}[/#d4a04a]\n\n"
            f"v. {__version__}    YOUR PERSONAL READING COMPANION\n\n"
            f"Configuration file: ~/.inkwell/inkwell-settings.json",
            id="about-panel",
        )
        yield Footer()

    def action_go_back(self) -> None:
        """Return to the previous screen."""
        self.app.pop_screen()
