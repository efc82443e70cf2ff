"""
Text rendering of teams, shops and battles.

Each slot is drawn as a small box:

    0 ───┐
    │ 🍯 │   modifier
    │ 🐜 │   species
    │❤️ 2 │   health
    │⚔️ 1 │   attack
    └────┘
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

from .params import TEAM_SIZE

if TYPE_CHECKING:
    from .combat_engine import Battle
    from .handlers.shop_handler import ShopState
    from .state.friend import Friend
    from .state.team import Team

EMPTY_CELL = "│    │ "


def _format_slots(slots: List[Optional[Friend]], order: Iterable[int]) -> str:
    order = list(order)
    rows = []
    rows.append("".join(f"{i} ───┐ " for i in order))
    rows.append("".join(
        f"│ {slots[i].modifier.glyph} │ " if slots[i] is not None and slots[i].modifier else EMPTY_CELL
        for i in order
    ))
    rows.append("".join(
        f"│ {slots[i].species.glyph} │ " if slots[i] is not None else EMPTY_CELL
        for i in order
    ))
    rows.append("".join(
        f"│❤️ {slots[i].health:<2}│ " if slots[i] is not None else EMPTY_CELL
        for i in order
    ))
    rows.append("".join(
        f"│⚔️ {slots[i].attack:<2}│ " if slots[i] is not None else EMPTY_CELL
        for i in order
    ))
    rows.append("└────┘ " * len(order))
    return "\n".join(row.rstrip() for row in rows)


def format_team(team: Team, reverse: bool = False) -> str:
    """
    Render a team. With ``reverse`` the front (slot 0) is drawn on the right,
    so it faces an opponent drawn to its right.
    """
    order = range(TEAM_SIZE - 1, -1, -1) if reverse else range(TEAM_SIZE)
    return _format_slots(team.slots, order)


def format_battle(battle: Battle) -> str:
    """Render both teams side by side with their fronts facing."""
    left = format_team(battle.team_a, reverse=True).split("\n")
    right = format_team(battle.team_b, reverse=False).split("\n")
    width = max(len(line) for line in left)
    return "\n".join(f"{a:<{width}}   {b}" for a, b in zip(left, right))


def format_shop(shop: ShopState) -> str:
    """Render gold, offers and the team."""
    offers = " ".join(
        f"{f.species.glyph}({f.health}/{f.attack})" if f is not None else "--"
        for f in shop.friends
    )
    foods = " ".join(f.glyph if f is not None else "--" for f in shop.foods)
    return "\n".join([
        f"Gold: {shop.gold}",
        f"Shop: {offers} | {foods}",
        format_team(shop.team, reverse=True),
    ])
