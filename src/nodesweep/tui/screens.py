"""TUI screens for nodesweep."""

from functools import partial
from pathlib import Path

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from nodesweep.cleaner import delete_paths
from nodesweep.models import DeletionResult


class MainScreen(Screen):
    """Table of discovered folders with selection and deletion."""

    # Priority bindings so the table's own cursor keys never fire
    BINDINGS = [
        Binding("q,escape", "app.quit", "Quit", priority=True),
        Binding("down,j", "next_row", "Down", show=False, priority=True),
        Binding("up,k", "previous_row", "Up", show=False, priority=True),
        Binding("right,l", "next_theme", "Next color", priority=True),
        Binding("left,h", "previous_theme", "Previous color", priority=True),
        Binding("enter", "toggle_mark", "Select/Deselect", priority=True),
        Binding("d", "delete_marked", "Delete selected", priority=True),
        Binding("tab", "sort", "Sort by next field", priority=True),
        Binding("r", "reverse", "Reverse order", priority=True),
    ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.deleting = False

    @property
    def session(self):
        return self.app.session

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="main-container"):
            yield DataTable(id="entry-table", cursor_type="row", zebra_stripes=True)
            yield Static("", id="status-line")

        yield Footer()

    def on_mount(self) -> None:
        """Initialize the screen."""
        self._update_table()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Hide sort and reverse when the session has them disabled."""
        if action == "sort":
            return self.session.config.enable_sort
        if action == "reverse":
            return self.session.config.enable_reverse
        return True

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _update_table(self) -> None:
        """Rebuild the table from the session."""
        session = self.session
        table = self.query_one("#entry-table", DataTable)

        table.clear(columns=True)

        _, name_width, size_width = session.entries.column_widths()
        selected_label = session.selected_label
        table.add_column(selected_label, width=max(10, len(selected_label)), key="selected")
        table.add_column("Name", width=max(name_width + 1, 4), key="name")
        table.add_column("Size", width=max(size_width + 1, 4), key="size")

        for entry in session.entries:
            table.add_row(entry.glyph, entry.display_name, entry.size_label, key=entry.path)

        self._move_table_cursor()
        self._update_status()

    def _move_table_cursor(self) -> None:
        if self.session.cursor is None:
            return
        table = self.query_one("#entry-table", DataTable)
        table.move_cursor(row=self.session.cursor)

    def _update_status(self, message: str = "") -> None:
        """Update the line below the table."""
        session = self.session
        info = self.query_one("#status-line", Static)

        if not len(session.entries):
            parts = ["[dim]No node_modules folders found[/dim]"]
        else:
            parts = [f"[bold]{len(session.entries)}[/bold] folders"]
            if session.marked_count:
                parts.append(f"[bold]{session.marked_count}[/bold] selected")
            if session.config.enable_sort:
                parts.append(f"[dim]next sort: {session.sort_field.value}[/dim]")
        if message:
            parts.append(message)

        info.update(" | ".join(parts))

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        """Follow cursor moves made by the table itself, such as mouse clicks."""
        if not len(self.session.entries):
            return

        # The event may be stale; the table's current row is authoritative
        row = event.data_table.cursor_row
        if 0 <= row < len(self.session.entries):
            self.session.cursor = row

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_next_row(self) -> None:
        self.session.move_next()
        self._move_table_cursor()

    def action_previous_row(self) -> None:
        self.session.move_previous()
        self._move_table_cursor()

    def action_next_theme(self) -> None:
        self.session.next_theme()
        self.app.apply_theme()

    def action_previous_theme(self) -> None:
        self.session.previous_theme()
        self.app.apply_theme()

    def action_toggle_mark(self) -> None:
        """Toggle selection of current item."""
        if self.deleting:
            return
        if self.session.toggle_mark_at_cursor() is not None:
            self._update_table()

    def action_sort(self) -> None:
        if self.deleting:
            return
        if self.session.sort_by_next_field() is not None:
            self._update_table()

    def action_reverse(self) -> None:
        if self.deleting:
            return
        if self.session.reverse():
            self._update_table()

    def action_delete_marked(self) -> None:
        """Start deleting the selected folders."""
        if self.deleting:
            return

        paths = self.session.marked_paths()
        if not paths:
            self.notify("No folders selected", severity="warning")
            return

        self.deleting = True
        self._update_status("[cyan]Deleting...[/cyan]")
        self.run_worker(partial(self._execute_deletion, paths), thread=True, exclusive=True)

    def _execute_deletion(self, paths: list[Path]) -> None:
        """Delete in a background thread, then hand the results to the UI thread."""
        session = self.session
        results = delete_paths(
            paths,
            session.root,
            target_name=session.config.target_name,
            max_workers=session.config.max_workers,
        )
        self.app.call_from_thread(self._show_results, results)

    def _show_results(self, results: list[DeletionResult]) -> None:
        """Drop deleted folders from the table and report the outcome."""
        failures = self.session.apply_deletion(results)
        self.deleting = False

        deleted = len(results) - len(failures)
        self._update_table()

        if failures:
            failed = "\n".join(f"{r.path}: {r.error}" for r in failures[:5])
            self.notify(
                f"{deleted} deleted, {len(failures)} failed\n{failed}",
                title="Delete",
                severity="warning",
                timeout=8,
            )
            self._update_status(f"[yellow]{len(failures)} could not be deleted[/yellow]")
        else:
            self.notify(f"Deleted {deleted} folders", title="Delete", timeout=3)
