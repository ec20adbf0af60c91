"""Highlight palettes for the nodesweep table."""

from dataclasses import dataclass

from textual.theme import Theme

# Tailwind slate shades shared by every palette
SLATE_950 = "#020617"
SLATE_900 = "#0f172a"
SLATE_200 = "#e2e8f0"


@dataclass(frozen=True)
class Palette:
    """The three shades of one Tailwind colour that the table uses."""

    name: str
    c400: str
    c600: str
    c900: str

    def to_theme(self) -> Theme:
        return Theme(
            name=f"nodesweep-{self.name}",
            primary=self.c400,
            secondary=self.c600,
            accent=self.c400,
            foreground=SLATE_200,
            background=SLATE_950,
            surface=SLATE_900,
            panel=self.c900,
            dark=True,
        )


PALETTES = (
    Palette("emerald", c400="#34d399", c600="#059669", c900="#064e3b"),
    Palette("indigo", c400="#818cf8", c600="#4f46e5", c900="#312e81"),
    Palette("red", c400="#f87171", c600="#dc2626", c900="#7f1d1d"),
    Palette("blue", c400="#60a5fa", c600="#2563eb", c900="#1e3a8a"),
)

THEMES = [palette.to_theme() for palette in PALETTES]


def theme_name(index: int) -> str:
    """Registered theme name for a palette index (wraps around)."""
    return THEMES[index % len(THEMES)].name
