"""Tests for data models."""

import pytest
from pydantic import ValidationError

from nodesweep.models import (
    MARKED_GLYPH,
    UNMARKED_GLYPH,
    DeletionResult,
    DisplayMode,
    Entry,
    SizeFormat,
    SortField,
    SweepConfig,
)


def make_entry(**overrides) -> Entry:
    data = {
        "path": "/home/u/project/node_modules",
        "display_name": "/project/node_modules",
        "size_bytes": 150,
        "size_label": "150 B",
    }
    data.update(overrides)
    return Entry(**data)


class TestSortField:
    def test_rotation_order(self):
        assert SortField.NAME.next() == SortField.MARKED
        assert SortField.MARKED.next() == SortField.SIZE
        assert SortField.SIZE.next() == SortField.NAME


class TestEntry:
    def test_defaults_to_unmarked(self):
        entry = make_entry()
        assert entry.marked is False
        assert entry.glyph == UNMARKED_GLYPH

    def test_marked_glyph(self):
        entry = make_entry(marked=True)
        assert entry.glyph == MARKED_GLYPH

    def test_unmarked_glyph_sorts_first(self):
        assert UNMARKED_GLYPH < MARKED_GLYPH

    def test_field_text(self):
        entry = make_entry()
        assert entry.field_text(SortField.NAME) == "/project/node_modules"
        assert entry.field_text(SortField.MARKED) == UNMARKED_GLYPH
        assert entry.field_text(SortField.SIZE) == "150 B"

    def test_rejects_negative_size(self):
        with pytest.raises(ValidationError):
            make_entry(size_bytes=-1)


class TestSweepConfig:
    def test_defaults(self):
        config = SweepConfig()
        assert config.display_mode == DisplayMode.RELATIVE
        assert config.size_format == SizeFormat.EXACT
        assert config.enable_sort is True
        assert config.enable_reverse is True
        assert config.numeric_size_sort is False
        assert config.target_name == "node_modules"
        assert config.max_workers is None

    def test_accepts_string_values(self):
        config = SweepConfig(display_mode="absolute", size_format="abbreviated")
        assert config.display_mode == DisplayMode.ABSOLUTE
        assert config.size_format == SizeFormat.ABBREVIATED

    def test_rejects_zero_workers(self):
        with pytest.raises(ValidationError):
            SweepConfig(max_workers=0)


class TestDeletionResult:
    def test_failure(self):
        result = DeletionResult(path="/x/node_modules", success=False, error="Not found")
        assert result.bytes_freed == 0
        assert result.error == "Not found"
