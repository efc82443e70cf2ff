"""Passive effects attached to a unit by food."""

from enum import Enum


class Modifier(Enum):
    """Modifier identifiers."""
    HONEY = "Honey"  # Summons a 1/1 Bee on death

    @property
    def glyph(self) -> str:
        return MODIFIER_GLYPHS[self]

    def __str__(self) -> str:
        return self.glyph


MODIFIER_GLYPHS = {
    Modifier.HONEY: "🍯",
}
