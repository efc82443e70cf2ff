"""
Species catalog - Tier 1 units of the free-to-play pack.

Base stats are listed as (health, attack). GhostCricket and Bee are only
ever created by abilities and are never offered in the shop.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, TYPE_CHECKING

from .modifiers import Modifier

if TYPE_CHECKING:
    from ..state.dice import Dice


class Species(Enum):
    """Unit kinds. Declaration order is the shop sampling order."""
    ANT = "Ant"
    BEAVER = "Beaver"
    CRICKET = "Cricket"
    DUCK = "Duck"
    FISH = "Fish"
    HORSE = "Horse"
    MOSQUITO = "Mosquito"
    OTTER = "Otter"
    PIG = "Pig"

    # Summon-only
    GHOST_CRICKET = "GhostCricket"
    BEE = "Bee"

    @property
    def data(self) -> SpeciesData:
        return SPECIES_DATA[self]

    @property
    def glyph(self) -> str:
        return SPECIES_DATA[self].glyph

    @property
    def purchasable(self) -> bool:
        return SPECIES_DATA[self].purchasable

    def default_power(self) -> tuple:
        """Return (health, attack) for a shop-bought unit of this species."""
        data = SPECIES_DATA[self]
        if not data.purchasable:
            raise ValueError(f"Cannot purchase {self.value}")
        return data.health, data.attack

    def default_modifier(self) -> Optional[Modifier]:
        return SPECIES_DATA[self].modifier

    @staticmethod
    def sample(dice: Dice) -> Species:
        """Draw a purchasable species uniformly."""
        return PURCHASABLE_SPECIES[dice.roll(0, len(PURCHASABLE_SPECIES))]

    def __str__(self) -> str:
        return self.glyph


@dataclass(frozen=True)
class SpeciesData:
    """Static stats and presentation for a species."""
    health: int
    attack: int
    glyph: str
    purchasable: bool = True
    modifier: Optional[Modifier] = None


SPECIES_DATA: Dict[Species, SpeciesData] = {
    Species.ANT: SpeciesData(health=2, attack=1, glyph="🐜"),
    Species.BEAVER: SpeciesData(health=2, attack=2, glyph="🦫"),
    Species.CRICKET: SpeciesData(health=1, attack=2, glyph="🦗"),
    Species.DUCK: SpeciesData(health=1, attack=2, glyph="🦆"),
    Species.FISH: SpeciesData(health=2, attack=3, glyph="🐟"),
    Species.HORSE: SpeciesData(health=2, attack=1, glyph="🐴"),
    Species.MOSQUITO: SpeciesData(health=2, attack=2, glyph="🦟"),
    Species.OTTER: SpeciesData(health=1, attack=2, glyph="🦦"),
    Species.PIG: SpeciesData(health=3, attack=1, glyph="🐷"),

    Species.GHOST_CRICKET: SpeciesData(health=1, attack=1, glyph="👻", purchasable=False),
    Species.BEE: SpeciesData(health=1, attack=1, glyph="🐝", purchasable=False),
}

PURCHASABLE_SPECIES: List[Species] = [s for s in Species if SPECIES_DATA[s].purchasable]
