"""
Shop food. Effects are registered in ``registry.abilities`` via
``@food_effect``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..state.dice import Dice


class Food(Enum):
    """Food identifiers, in shop sampling order."""
    APPLE = "Apple"
    HONEY = "Honey"

    @property
    def glyph(self) -> str:
        return FOOD_GLYPHS[self]

    @staticmethod
    def sample(dice: Dice) -> Food:
        return ALL_FOODS[dice.roll(0, len(ALL_FOODS))]

    def __str__(self) -> str:
        return self.glyph


FOOD_GLYPHS = {
    Food.APPLE: "🍎",
    Food.HONEY: "🍯",
}

ALL_FOODS = list(Food)
