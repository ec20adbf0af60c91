"""Tests for the Textual interface, driven through Pilot."""

import asyncio
from pathlib import Path

from textual.widgets import DataTable

from nodesweep.models import SweepConfig
from nodesweep.session import Session, scan_session
from nodesweep.themes import theme_name
from nodesweep.tui.app import NodeSweepApp


def make_project(root: Path, name: str, size: int) -> Path:
    node_modules = root / name / "node_modules"
    node_modules.mkdir(parents=True)
    (node_modules / "index.js").write_bytes(b"x" * size)
    return node_modules


def run_keys(app: NodeSweepApp, *keys: str, wait_for_workers: bool = False) -> int:
    """Press keys in a headless app and return the final table row count."""

    async def _run() -> int:
        async with app.run_test() as pilot:
            await pilot.press(*keys)
            if wait_for_workers:
                await app.workers.wait_for_complete()
            await pilot.pause()
            return app.screen.query_one("#entry-table", DataTable).row_count

    return asyncio.run(_run())


class TestMainScreen:
    def test_lists_entries(self, tmp_path):
        for name in ["a", "b", "c"]:
            make_project(tmp_path, name, 10)
        app = NodeSweepApp(scan_session(tmp_path))

        assert run_keys(app) == 3

    def test_navigation_and_marking(self, tmp_path):
        for name in ["a", "b", "c"]:
            make_project(tmp_path, name, 10)
        session = scan_session(tmp_path)
        app = NodeSweepApp(session)

        run_keys(app, "down", "down", "down", "up", "enter")

        assert session.cursor == 2
        assert session.entries[2].marked is True
        assert session.selected_bytes == 10

    def test_theme_cycling(self, tmp_path):
        session = Session([], tmp_path)
        app = NodeSweepApp(session)

        run_keys(app, "right", "right", "left")

        assert session.theme_index == 1
        assert app.theme == theme_name(1)

    def test_reverse_and_sort(self, tmp_path):
        for name in ["a", "b"]:
            make_project(tmp_path, name, 10)
        session = scan_session(tmp_path)
        app = NodeSweepApp(session)

        run_keys(app, "r")
        assert [e.display_name for e in session.entries] == ["/b/node_modules", "/a/node_modules"]

        app = NodeSweepApp(session)
        run_keys(app, "tab")
        assert [e.display_name for e in session.entries] == ["/a/node_modules", "/b/node_modules"]

    def test_disabled_reverse(self, tmp_path):
        for name in ["a", "b"]:
            make_project(tmp_path, name, 10)
        session = scan_session(tmp_path, SweepConfig(enable_reverse=False))
        app = NodeSweepApp(session)

        run_keys(app, "r")

        assert [e.display_name for e in session.entries] == ["/a/node_modules", "/b/node_modules"]

    def test_delete_marked(self, tmp_path):
        a = make_project(tmp_path, "a", 10)
        b = make_project(tmp_path, "b", 20)
        session = scan_session(tmp_path)
        app = NodeSweepApp(session)

        rows = run_keys(app, "enter", "d", wait_for_workers=True)

        assert rows == 1
        assert not a.exists()
        assert b.exists()
        assert [e.path for e in session.entries] == [str(b)]
        assert session.deleted_count == 1

    def test_delete_with_nothing_marked(self, tmp_path):
        a = make_project(tmp_path, "a", 10)
        session = scan_session(tmp_path)
        app = NodeSweepApp(session)

        rows = run_keys(app, "d")

        assert rows == 1
        assert a.exists()

    def test_click_moves_cursor(self, tmp_path):
        for name in ["a", "b", "c"]:
            make_project(tmp_path, name, 10)
        session = scan_session(tmp_path)
        app = NodeSweepApp(session)

        async def _run() -> int:
            async with app.run_test() as pilot:
                # Border, header, then one line per row
                await pilot.click("#entry-table", offset=(15, 4))
                await pilot.pause()
                await pilot.press("enter")
                await pilot.pause()
                return app.screen.query_one("#entry-table", DataTable).cursor_row

        highlighted = asyncio.run(_run())

        assert highlighted == 2
        assert session.cursor == 2
        assert [e.path for e in session.entries.marked()] == [str(tmp_path / "c" / "node_modules")]
