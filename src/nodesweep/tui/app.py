"""Main TUI application for nodesweep."""

from textual.app import App

from nodesweep.session import Session
from nodesweep.themes import THEMES, theme_name
from nodesweep.tui.screens import MainScreen


class NodeSweepApp(App):
    """Interactive node_modules browser and cleaner."""

    TITLE = "nodesweep"
    SUB_TITLE = "Find and delete node_modules"

    CSS_PATH = "styles.tcss"

    def __init__(self, session: Session):
        super().__init__()
        self.session = session
        for theme in THEMES:
            self.register_theme(theme)

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.apply_theme()
        self.push_screen(MainScreen())

    def apply_theme(self) -> None:
        """Switch to the palette selected in the session."""
        self.theme = theme_name(self.session.theme_index)


def run_tui(session: Session) -> None:
    """Run the interactive TUI.

    Args:
        session: Scanned entries and options to browse
    """
    app = NodeSweepApp(session)
    app.run()
