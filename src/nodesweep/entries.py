"""The list of discovered folders and its ordering operations."""

import os
from pathlib import Path
from typing import Iterable, Iterator, Mapping

from rich.cells import cell_len

from nodesweep.models import DisplayMode, Entry, SortField, SweepConfig
from nodesweep.sizes import format_size


def display_name_for(path: Path, root: Path, display_mode: DisplayMode) -> str:
    """
    Name shown for a folder.

    Relative names keep their leading separator ('/project/node_modules')
    so they read as paths below the home directory.
    """
    if display_mode == DisplayMode.ABSOLUTE:
        return str(path)
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    return os.sep + str(relative)


def build_entries(
    candidates: Iterable[Path],
    sizes: Mapping[Path, int],
    root: Path,
    config: SweepConfig,
) -> list[Entry]:
    """
    Create one unmarked entry per candidate, in candidate order.

    Args:
        candidates: Folders returned by the scanner
        sizes: Byte counts from the size estimator (missing paths count as 0)
        root: Scan root, used for relative display names
        config: Display and size format options

    Returns:
        List of entries
    """
    entries = []
    for path in candidates:
        size = sizes.get(path, 0)
        entries.append(
            Entry(
                path=str(path),
                display_name=display_name_for(path, root, config.display_mode),
                size_bytes=size,
                size_label=format_size(size, config.size_format),
            )
        )
    return entries


class EntryList:
    """Ordered collection of entries with a rotating sort key."""

    def __init__(self, entries: Iterable[Entry] = (), numeric_size_sort: bool = False) -> None:
        self._entries: list[Entry] = list(entries)
        self.numeric_size_sort = numeric_size_sort
        self.sort_field = SortField.NAME

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def _sort_key(self, field: SortField):
        if field == SortField.SIZE and self.numeric_size_sort:
            return lambda entry: entry.size_bytes
        return lambda entry: entry.field_text(field)

    def sort_by_next_field(self) -> SortField:
        """
        Sort by the active field, then advance to the next one.

        Returns:
            The field the list is now sorted by
        """
        field = self.sort_field
        self._entries.sort(key=self._sort_key(field))
        self.sort_field = field.next()
        return field

    def reverse(self) -> None:
        """Reverse the current order in place."""
        self._entries.reverse()

    def marked(self) -> list[Entry]:
        """Entries queued for deletion, in list order."""
        return [entry for entry in self._entries if entry.marked]

    def remove_paths(self, paths: Iterable[str]) -> int:
        """
        Drop entries by path.

        Returns:
            Number of entries removed
        """
        doomed = set(paths)
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.path not in doomed]
        return before - len(self._entries)

    def column_widths(self) -> tuple[int, int, int]:
        """Widest cell, in terminal columns, of the glyph, name and size columns."""
        if not self._entries:
            return 0, 0, 0
        return (
            max(cell_len(entry.glyph) for entry in self._entries),
            max(cell_len(entry.display_name) for entry in self._entries),
            max(cell_len(entry.size_label) for entry in self._entries),
        )
