"""Tests for folder deletion."""

from pathlib import Path
from unittest.mock import patch

from nodesweep.cleaner import delete_directory, delete_paths, is_path_safe


def make_node_modules(root: Path, project: str, size: int = 10) -> Path:
    node_modules = root / project / "node_modules"
    (node_modules / "pkg").mkdir(parents=True)
    (node_modules / "pkg" / "index.js").write_bytes(b"x" * size)
    return node_modules


class TestIsPathSafe:
    def test_allows_target_below_root(self, tmp_path):
        assert is_path_safe(tmp_path / "project" / "node_modules", tmp_path)

    def test_blocks_root(self, tmp_path):
        assert not is_path_safe(tmp_path, tmp_path)

    def test_blocks_other_names(self, tmp_path):
        assert not is_path_safe(tmp_path / "project", tmp_path)
        assert not is_path_safe(tmp_path / "project" / "src", tmp_path)

    def test_blocks_paths_outside_root(self, tmp_path):
        assert not is_path_safe(Path("/elsewhere/node_modules"), tmp_path)

    def test_custom_target(self, tmp_path):
        assert is_path_safe(tmp_path / "p" / ".venv", tmp_path, target_name=".venv")
        assert not is_path_safe(tmp_path / "p" / "node_modules", tmp_path, target_name=".venv")


class TestDeleteDirectory:
    def test_deletes_tree(self, tmp_path):
        node_modules = make_node_modules(tmp_path, "project", size=42)

        result = delete_directory(node_modules, tmp_path)

        assert result.success is True
        assert result.bytes_freed == 42
        assert result.error is None
        assert not node_modules.exists()
        assert (tmp_path / "project").exists()

    def test_missing_folder(self, tmp_path):
        result = delete_directory(tmp_path / "gone" / "node_modules", tmp_path)
        assert result.success is False
        assert result.error == "Not found"

    def test_blocked_path_is_not_touched(self, tmp_path):
        project = tmp_path / "project"
        project.mkdir()

        result = delete_directory(project, tmp_path)

        assert result.success is False
        assert "Blocked path" in result.error
        assert project.exists()

    def test_permission_error(self, tmp_path):
        node_modules = make_node_modules(tmp_path, "project")
        with patch("nodesweep.cleaner.shutil.rmtree", side_effect=PermissionError("denied")):
            result = delete_directory(node_modules, tmp_path)

        assert result.success is False
        assert result.error.startswith("Permission denied")
        assert node_modules.exists()

    def test_os_error(self, tmp_path):
        node_modules = make_node_modules(tmp_path, "project")
        with patch("nodesweep.cleaner.shutil.rmtree", side_effect=OSError("disk on fire")):
            result = delete_directory(node_modules, tmp_path)

        assert result.success is False
        assert result.error.startswith("OS error")

    def test_failing_existence_check(self, tmp_path):
        node_modules = make_node_modules(tmp_path, "project")
        with patch.object(Path, "is_dir", side_effect=PermissionError("denied")):
            result = delete_directory(node_modules, tmp_path)

        assert result.success is False
        assert result.error.startswith("Permission denied")
        assert node_modules.exists()


class TestDeletePaths:
    def test_one_result_per_path(self, tmp_path):
        first = make_node_modules(tmp_path, "one")
        second = make_node_modules(tmp_path, "two")

        results = delete_paths([first, second], tmp_path, max_workers=2)

        assert sorted(r.path for r in results) == sorted([str(first), str(second)])
        assert all(r.success for r in results)
        assert not first.exists()
        assert not second.exists()

    def test_failure_does_not_stop_others(self, tmp_path):
        present = make_node_modules(tmp_path, "present")
        missing = tmp_path / "missing" / "node_modules"

        results = {r.path: r for r in delete_paths([missing, present], tmp_path)}

        assert results[str(present)].success is True
        assert results[str(missing)].success is False
        assert not present.exists()

    def test_no_paths(self, tmp_path):
        assert delete_paths([], tmp_path) == []

    def test_unreadable_path_does_not_stop_batch(self, tmp_path):
        readable = make_node_modules(tmp_path, "readable")
        unreadable = make_node_modules(tmp_path, "unreadable")
        real_is_dir = Path.is_dir

        def fake_is_dir(self, *args, **kwargs):
            if self == unreadable:
                raise PermissionError(13, "Permission denied", str(self))
            return real_is_dir(self, *args, **kwargs)

        with patch.object(Path, "is_dir", autospec=True, side_effect=fake_is_dir):
            results = {r.path: r for r in delete_paths([readable, unreadable], tmp_path)}

        assert results[str(readable)].success is True
        assert results[str(unreadable)].success is False
        assert results[str(unreadable)].error.startswith("Permission denied")
        assert not readable.exists()
        assert unreadable.exists()

    def test_unexpected_error_becomes_failed_result(self, tmp_path):
        first = make_node_modules(tmp_path, "one")
        second = make_node_modules(tmp_path, "two")

        with patch("nodesweep.cleaner.delete_directory", side_effect=RuntimeError("boom")):
            results = delete_paths([first, second], tmp_path)

        assert sorted(r.path for r in results) == sorted([str(first), str(second)])
        assert all(r.success is False for r in results)
        assert all("boom" in r.error for r in results)
