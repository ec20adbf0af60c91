"""Data models for nodesweep."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

UNMARKED_GLYPH = "  ☐"
MARKED_GLYPH = "  ☑"


class DisplayMode(str, Enum):
    """How an entry's path is shown in the table."""

    RELATIVE = "relative"  # Relative to the home directory, leading separator kept
    ABSOLUTE = "absolute"


class SizeFormat(str, Enum):
    """How byte counts are rendered."""

    EXACT = "exact"  # "1.2 GB"
    ABBREVIATED = "abbreviated"  # "1.2G", display only


class SortField(str, Enum):
    """Sort keys, in rotation order."""

    NAME = "name"
    MARKED = "marked"
    SIZE = "size"

    def next(self) -> "SortField":
        """The field that follows this one in the rotation."""
        fields = list(SortField)
        return fields[(fields.index(self) + 1) % len(fields)]


class SweepConfig(BaseModel):
    """Options that select the behaviour of a sweep session."""

    display_mode: DisplayMode = Field(
        DisplayMode.RELATIVE, description="Show paths relative to home or absolute"
    )
    size_format: SizeFormat = Field(SizeFormat.EXACT, description="Size column format")
    enable_sort: bool = Field(True, description="Allow cycling the sort field")
    enable_reverse: bool = Field(True, description="Allow reversing the list order")
    numeric_size_sort: bool = Field(
        False,
        description="Sort the size column by byte count instead of by its label",
    )
    target_name: str = Field("node_modules", description="Directory name to look for")
    max_workers: Optional[int] = Field(
        None, ge=1, description="Thread pool size for scanning, sizing and deleting"
    )


class Entry(BaseModel):
    """One discovered target folder."""

    path: str = Field(..., description="Absolute path, used as the entry's identity")
    display_name: str = Field(..., description="Path as shown to the user")
    size_bytes: int = Field(..., ge=0, description="Total size of regular files in bytes")
    size_label: str = Field(..., description="Formatted size shown to the user")
    marked: bool = Field(False, description="Queued for deletion")

    @property
    def glyph(self) -> str:
        """Checkbox glyph for the marked state."""
        return MARKED_GLYPH if self.marked else UNMARKED_GLYPH

    def field_text(self, field: SortField) -> str:
        """The user-visible string for a sortable field."""
        if field == SortField.NAME:
            return self.display_name
        if field == SortField.MARKED:
            return self.glyph
        return self.size_label


class DeletionResult(BaseModel):
    """Outcome of deleting one folder."""

    path: str = Field(..., description="Path that deletion was attempted on")
    success: bool = Field(True, description="Whether the folder is gone")
    bytes_freed: int = Field(0, description="Bytes freed by the deletion")
    error: Optional[str] = Field(None, description="Error message if failed")
