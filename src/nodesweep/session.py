"""Cursor, selection and deletion state for one nodesweep run."""

import logging
from pathlib import Path
from typing import Callable, Iterable

from nodesweep.cleaner import delete_paths
from nodesweep.entries import EntryList, build_entries
from nodesweep.models import DeletionResult, Entry, SortField, SweepConfig
from nodesweep.scanner import find_target_directories
from nodesweep.sizes import format_size_exact, measure_sizes
from nodesweep.themes import PALETTES

log = logging.getLogger(__name__)

# Height of one table row in terminal lines
ROW_HEIGHT = 4


class Session:
    """
    Everything the interface reads and mutates while running.

    The cursor is None exactly when there are no entries. The selected byte
    total is updated on each toggle and recomputed after a deletion.
    """

    def __init__(
        self,
        entries: Iterable[Entry],
        root: Path,
        config: SweepConfig | None = None,
    ) -> None:
        self.config = config or SweepConfig()
        self.root = Path(root)
        self.entries = EntryList(entries, numeric_size_sort=self.config.numeric_size_sort)
        self.cursor: int | None = 0 if len(self.entries) else None
        self.selected_bytes = sum(entry.size_bytes for entry in self.entries.marked())
        self.theme_index = 0
        self.deleted_count = 0
        self.freed_bytes = 0

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def marked_count(self) -> int:
        return len(self.entries.marked())

    @property
    def current(self) -> Entry | None:
        """Entry under the cursor."""
        if self.cursor is None:
            return None
        return self.entries[self.cursor]

    @property
    def scroll_position(self) -> int:
        return (self.cursor or 0) * ROW_HEIGHT

    @property
    def selected_label(self) -> str:
        """Header text for the selection column."""
        if self.selected_bytes == 0:
            return "Selected"
        return f"Selected: {format_size_exact(self.selected_bytes)}"

    @property
    def sort_field(self) -> SortField:
        """Field the next sort will use."""
        return self.entries.sort_field

    # -------------------------------------------------------------------------
    # Cursor
    # -------------------------------------------------------------------------

    def move_next(self) -> None:
        """Move the cursor down one row, wrapping to the top."""
        if not len(self.entries):
            return
        if self.cursor is None:
            self.cursor = 0
        else:
            self.cursor = (self.cursor + 1) % len(self.entries)

    def move_previous(self) -> None:
        """Move the cursor up one row, wrapping to the bottom."""
        if not len(self.entries):
            return
        if self.cursor is None:
            self.cursor = 0
        else:
            self.cursor = (self.cursor - 1) % len(self.entries)

    def _clamp_cursor(self) -> None:
        if not len(self.entries):
            self.cursor = None
        elif self.cursor is None:
            self.cursor = 0
        else:
            self.cursor = min(self.cursor, len(self.entries) - 1)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def toggle_mark_at_cursor(self) -> Entry | None:
        """
        Flip the marked state of the entry under the cursor.

        Returns:
            The toggled entry, or None if the list is empty
        """
        entry = self.current
        if entry is None:
            return None

        entry.marked = not entry.marked
        if entry.marked:
            self.selected_bytes += entry.size_bytes
        else:
            self.selected_bytes -= entry.size_bytes
        return entry

    def marked_paths(self) -> list[Path]:
        return [Path(entry.path) for entry in self.entries.marked()]

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def sort_by_next_field(self) -> SortField | None:
        """Re-sort by the next field. The cursor keeps its row index."""
        if not self.config.enable_sort:
            return None
        return self.entries.sort_by_next_field()

    def reverse(self) -> bool:
        """Reverse the order. The cursor keeps its row index."""
        if not self.config.enable_reverse:
            return False
        self.entries.reverse()
        return True

    # -------------------------------------------------------------------------
    # Theme
    # -------------------------------------------------------------------------

    def next_theme(self) -> int:
        self.theme_index = (self.theme_index + 1) % len(PALETTES)
        return self.theme_index

    def previous_theme(self) -> int:
        self.theme_index = (self.theme_index + len(PALETTES) - 1) % len(PALETTES)
        return self.theme_index

    # -------------------------------------------------------------------------
    # Deletion
    # -------------------------------------------------------------------------

    def apply_deletion(self, results: Iterable[DeletionResult]) -> list[DeletionResult]:
        """
        Remove every attempted path from the list, whether or not it was deleted.

        Args:
            results: Results from the deletion executor

        Returns:
            The failed results
        """
        results = list(results)
        removed = self.entries.remove_paths(result.path for result in results)
        self.selected_bytes = sum(entry.size_bytes for entry in self.entries.marked())
        self._clamp_cursor()

        failures = [result for result in results if not result.success]
        self.deleted_count += len(results) - len(failures)
        self.freed_bytes += sum(result.bytes_freed for result in results if result.success)
        log.info("Removed %d entries, %d deletions failed", removed, len(failures))
        return failures

    def delete_marked(self) -> list[DeletionResult]:
        """
        Delete every marked folder and drop it from the list.

        Returns:
            One DeletionResult per attempted folder
        """
        paths = self.marked_paths()
        if not paths:
            return []

        results = delete_paths(
            paths,
            self.root,
            target_name=self.config.target_name,
            max_workers=self.config.max_workers,
        )
        self.apply_deletion(results)
        return results


def scan_session(
    root: Path,
    config: SweepConfig | None = None,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> Session:
    """
    Scan a root directory and build a session from what was found.

    Args:
        root: Directory to scan
        config: Session options
        progress_callback: Optional callback(stage, current, total)

    Returns:
        Session over the discovered folders
    """
    config = config or SweepConfig()

    if progress_callback:
        progress_callback("Searching", 0, 0)
    candidates = find_target_directories(
        root, target_name=config.target_name, max_workers=config.max_workers
    )

    total = len(candidates)
    measured = 0

    def on_measured(path: Path, size: int) -> None:
        nonlocal measured
        measured += 1
        if progress_callback:
            progress_callback("Measuring", measured, total)

    sizes = measure_sizes(candidates, max_workers=config.max_workers, progress_callback=on_measured)
    return Session(build_entries(candidates, sizes, root, config), root, config)
