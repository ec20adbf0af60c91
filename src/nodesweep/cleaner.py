"""Deletion of marked folders with safety checks for nodesweep."""

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable

from nodesweep.models import DeletionResult
from nodesweep.scanner import DEFAULT_TARGET
from nodesweep.sizes import directory_size

log = logging.getLogger(__name__)


def is_path_safe(path: Path, root: Path, target_name: str = DEFAULT_TARGET) -> bool:
    """
    Check if a path may be deleted.

    Only folders named target_name strictly below the scan root qualify.

    Args:
        path: Path to check
        root: Scan root
        target_name: Folder name the scanner looked for

    Returns:
        True if safe to delete, False otherwise
    """
    path = Path(path)
    root = Path(root)

    if path == root or path.name != target_name:
        return False

    try:
        path.relative_to(root)
    except ValueError:
        return False

    return True


def delete_directory(
    path: Path,
    root: Path,
    target_name: str = DEFAULT_TARGET,
) -> DeletionResult:
    """
    Delete one folder tree.

    Never raises; problems are reported in the result.

    Args:
        path: Folder to delete
        root: Scan root, for the safety check
        target_name: Folder name the scanner looked for

    Returns:
        DeletionResult for the path
    """
    path = Path(path)

    if not is_path_safe(path, root, target_name):
        return DeletionResult(path=str(path), success=False, error=f"Blocked path: {path}")

    try:
        if not path.is_dir() or path.is_symlink():
            return DeletionResult(path=str(path), success=False, error="Not found")

        size = directory_size(path)
        shutil.rmtree(path)
        return DeletionResult(path=str(path), success=True, bytes_freed=size)

    except PermissionError as e:
        return DeletionResult(path=str(path), success=False, error=f"Permission denied: {e}")
    except OSError as e:
        return DeletionResult(path=str(path), success=False, error=f"OS error: {e}")


def delete_paths(
    paths: Iterable[Path],
    root: Path,
    target_name: str = DEFAULT_TARGET,
    max_workers: int | None = None,
) -> list[DeletionResult]:
    """
    Delete many folders in parallel.

    Every path is attempted independently; one failure does not stop the
    others.

    Args:
        paths: Folders to delete
        root: Scan root, for the safety check
        target_name: Folder name the scanner looked for
        max_workers: Thread pool size (None for the executor default)

    Returns:
        One DeletionResult per path
    """
    results: list[DeletionResult] = []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(delete_directory, path, root, target_name): path for path in paths
        }
        for future in as_completed(futures):
            path = futures[future]
            try:
                result = future.result()
            except Exception as e:
                result = DeletionResult(path=str(path), success=False, error=f"Unexpected error: {e}")
            if result.success:
                log.info("Deleted %s", result.path)
            else:
                log.warning("Could not delete %s: %s", result.path, result.error)
            results.append(result)

    return results
