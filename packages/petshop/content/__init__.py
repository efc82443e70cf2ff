"""
Content module - static game data.

Contains:
- Species catalog (base stats, glyphs, shop sampling)
- Modifiers granted by food
- Food offered in the shop
"""

from .modifiers import Modifier, MODIFIER_GLYPHS
from .species import Species, SpeciesData, SPECIES_DATA, PURCHASABLE_SPECIES
from .food import Food, FOOD_GLYPHS, ALL_FOODS

__all__ = [
    "Modifier", "MODIFIER_GLYPHS",
    "Species", "SpeciesData", "SPECIES_DATA", "PURCHASABLE_SPECIES",
    "Food", "FOOD_GLYPHS", "ALL_FOODS",
]
