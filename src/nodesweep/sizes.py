"""Directory size estimation and byte formatting for nodesweep."""

import logging
import os
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable

from nodesweep.models import SizeFormat

log = logging.getLogger(__name__)

EXACT_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB")
ABBREVIATED_UNITS = ("K", "M", "G", "T", "P", "E")

_MULTIPLIERS = {"B": 1}
for _exp, _prefix in enumerate("KMGTPE", start=1):
    _MULTIPLIERS[f"{_prefix}B"] = 1000**_exp
    _MULTIPLIERS[f"{_prefix}IB"] = 1024**_exp

_LABEL_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMGTPE]?I?B)\s*$", re.IGNORECASE)


# =============================================================================
# Size estimation
# =============================================================================


def directory_size(path: Path) -> int:
    """
    Total apparent size of all regular files below a directory.

    Uses os.scandir and does not follow symlinks. Entries that cannot be
    read contribute nothing instead of failing the whole computation.

    Args:
        path: Directory to measure

    Returns:
        Size in bytes
    """
    total_size = 0

    def _scan(p: str):
        nonlocal total_size
        try:
            with os.scandir(p) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total_size += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            _scan(entry.path)
                    except (PermissionError, OSError):
                        continue
        except (PermissionError, OSError) as e:
            log.debug("Skipping unreadable directory %s: %s", p, e)

    _scan(str(path))
    return total_size


def measure_sizes(
    paths: Iterable[Path],
    max_workers: int | None = None,
    progress_callback: Callable[[Path, int], None] | None = None,
) -> dict[Path, int]:
    """
    Measure many directories in parallel.

    Each directory is an independent task; nothing is shared between them.

    Args:
        paths: Directories to measure
        max_workers: Thread pool size (None for the executor default)
        progress_callback: Optional callback(path, size_bytes) per finished task

    Returns:
        Mapping of path to size in bytes
    """
    sizes: dict[Path, int] = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(directory_size, path): path for path in paths}
        for future in as_completed(futures):
            path = futures[future]
            try:
                size = future.result()
            except Exception as e:
                log.warning("Could not measure %s: %s", path, e)
                size = 0
            sizes[path] = size

            if progress_callback:
                progress_callback(path, size)

    return sizes


# =============================================================================
# Formatting
# =============================================================================


def format_size_exact(size_bytes: int) -> str:
    """Format bytes with decimal units, e.g. '150 B' or '1.2 GB'."""
    if size_bytes < 1000:
        return f"{size_bytes} B"

    exp = 1
    while exp < len(EXACT_UNITS) and round(size_bytes / 1000**exp, 1) >= 1000:
        exp += 1
    return f"{size_bytes / 1000**exp:.1f} {EXACT_UNITS[exp - 1]}"


def format_size_abbreviated(size_bytes: int) -> str:
    """Format bytes in a short binary form, e.g. '150B', '1.5K' or '23M'."""
    if size_bytes < 1024:
        return f"{size_bytes}B"

    exp = 1
    while exp < len(ABBREVIATED_UNITS) and round(size_bytes / 1024**exp) >= 1024:
        exp += 1
    value = size_bytes / 1024**exp
    if round(value, 1) < 10:
        return f"{value:.1f}{ABBREVIATED_UNITS[exp - 1]}"
    return f"{value:.0f}{ABBREVIATED_UNITS[exp - 1]}"


def format_size(size_bytes: int, size_format: SizeFormat = SizeFormat.EXACT) -> str:
    """Format bytes with the requested formatter."""
    if size_format == SizeFormat.ABBREVIATED:
        return format_size_abbreviated(size_bytes)
    return format_size_exact(size_bytes)


def parse_size(label: str) -> int:
    """
    Parse an exact size label back into a byte count.

    Accepts decimal ('1.2 KB') and binary ('1.2 KiB') units.

    Raises:
        ValueError: If the label is not a size
    """
    match = _LABEL_RE.match(label)
    if not match:
        raise ValueError(f"Not a size label: {label!r}")

    value, unit = match.groups()
    return round(float(value) * _MULTIPLIERS[unit.upper()])
