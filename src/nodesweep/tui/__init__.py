"""Textual interface for nodesweep."""

from nodesweep.tui.app import NodeSweepApp, run_tui

__all__ = ["NodeSweepApp", "run_tui"]
