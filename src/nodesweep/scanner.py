"""Discovery of node_modules folders below a root directory.

Each top-level subdirectory of the root is walked as its own task so large
home directories are scanned in parallel.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

log = logging.getLogger(__name__)

DEFAULT_TARGET = "node_modules"

# A candidate is dropped if any folder between the root and the candidate
# contains one of these
EXCLUDED_SUBSTRINGS = (
    "node_modules",
    ".cache",
    ".vscode",
    ".local",
    ".npm",
    ".nvm",
    ".steam",
    ".var",
    ".cargo",
)

# ...or is exactly one of these
EXCLUDED_NAMES = frozenset({"caches", "Caches"})


def is_excluded_segment(name: str) -> bool:
    """Check a single folder name against the exclusion list."""
    if name in EXCLUDED_NAMES:
        return True
    return any(part in name for part in EXCLUDED_SUBSTRINGS)


def _walk(directory: str, target_name: str) -> list[Path]:
    """Collect target folders below one directory, depth first."""
    found: list[Path] = []
    pending = [directory]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        # Symlinks are never followed, this also avoids loops
                        if not entry.is_dir(follow_symlinks=False):
                            continue

                        if entry.name == target_name:
                            found.append(Path(entry.path))
                            continue

                        # Anything below an excluded folder would be excluded too
                        if is_excluded_segment(entry.name):
                            continue

                        pending.append(entry.path)

                    except (PermissionError, OSError):
                        continue

        except (PermissionError, OSError) as e:
            log.debug("Skipping unreadable directory %s: %s", current, e)

    return found


def find_target_directories(
    root: Path,
    target_name: str = DEFAULT_TARGET,
    max_workers: int | None = None,
) -> list[Path]:
    """
    Find every folder named target_name below root.

    Candidates with an excluded ancestor (caches, editor state, package
    manager stores, other node_modules) are left out. Unreadable folders are
    skipped silently.

    Args:
        root: Directory to scan
        target_name: Folder name to look for
        max_workers: Thread pool size (None for the executor default)

    Returns:
        Absolute paths of the matching folders, sorted
    """
    root = Path(root)
    found: list[Path] = []
    subtrees: list[str] = []

    # The root itself is not checked against the exclusion list
    with os.scandir(root) as entries:
        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError:
                continue

            if entry.name == target_name:
                found.append(Path(entry.path))
            elif not is_excluded_segment(entry.name):
                subtrees.append(entry.path)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(_walk, subtree, target_name): subtree for subtree in subtrees}
        for future in as_completed(futures):
            found.extend(future.result())

    log.debug("Found %d %s folders below %s", len(found), target_name, root)
    return sorted(found)
