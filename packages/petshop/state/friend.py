"""
Friend - a species embodied onto a team or a shop slot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..content.modifiers import Modifier
from ..content.species import Species


@dataclass
class Friend:
    """A live unit. Health 0 means dead but not yet removed."""

    species: Species
    attack: int
    health: int
    modifier: Optional[Modifier] = None
    exp: int = 0

    @classmethod
    def new(cls, species: Species) -> Friend:
        """Create a unit with the catalog stats, as offered in the shop."""
        health, attack = species.default_power()
        return cls(
            species=species,
            attack=attack,
            health=health,
            modifier=species.default_modifier(),
        )

    @classmethod
    def summoned(cls, species: Species, health: int, attack: int) -> Friend:
        """Create an ability-spawned unit with explicit stats."""
        return cls(species=species, attack=attack, health=health)

    @property
    def level(self) -> int:
        # Staircase kept exactly as the game data has it; 3-5 exp stays at 1
        if 0 <= self.exp <= 2:
            return 1
        if 3 <= self.exp <= 5:
            return 1
        if self.exp == 6:
            return 3
        raise ValueError(f"Invalid exp: {self.exp}")

    @property
    def is_dead(self) -> bool:
        return self.health == 0

    def has_default_power(self) -> bool:
        data = self.species.data
        return self.health == data.health and self.attack == data.attack

    def copy(self) -> Friend:
        return Friend(
            species=self.species,
            attack=self.attack,
            health=self.health,
            modifier=self.modifier,
            exp=self.exp,
        )

    def key(self) -> Tuple[str, int, int, str, int]:
        """Hashable, sortable identity of this unit's state."""
        modifier = self.modifier.value if self.modifier else ""
        return (self.species.value, self.attack, self.health, modifier, self.exp)
