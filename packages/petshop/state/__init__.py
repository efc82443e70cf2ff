"""
State module - choice sources and team state.

Contains:
- Dice (random and exhaustive choice sources, selection helpers)
- Friend (a unit on a team or in the shop)
- Team (five front-anchored slots with layout repair and triggers)
"""

# Choice sources
from .dice import (
    Dice,
    RandomDice,
    DeterministicDice,
    pick_where,
    pick_some,
    pick_one,
)

# Units
from .friend import Friend

# Teams
from .team import Team

__all__ = [
    # Dice
    "Dice", "RandomDice", "DeterministicDice",
    "pick_where", "pick_some", "pick_one",
    # Units
    "Friend",
    # Teams
    "Team",
]
