"""
Team - up to five friends in fixed slots.

The front of the team is index 0, i.e. attacking and defending first.
Occupied slots are kept contiguous from index 0 after every committed
change; gaps only exist while units are being removed or shuffled.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from ..content.species import Species
from ..params import TEAM_SIZE
from ..registry import (
    AbilityContext, TriggerHook, execute_ability, execute_modifier,
)
from .dice import Dice, pick_one, pick_some, pick_where
from .friend import Friend

logger = logging.getLogger(__name__)


class Team:
    """Fixed-capacity ordered slot list of optional friends."""

    def __init__(self, slots: Optional[Sequence[Optional[Friend]]] = None):
        if slots is None:
            slots = [None] * TEAM_SIZE
        if len(slots) != TEAM_SIZE:
            raise ValueError(f"Team needs {TEAM_SIZE} slots, got {len(slots)}")
        self.slots: List[Optional[Friend]] = list(slots)

    @classmethod
    def of(cls, *friends: Friend) -> Team:
        """Build a compact team from front to back."""
        if len(friends) > TEAM_SIZE:
            raise ValueError(f"Too many friends for a team: {len(friends)}")
        return cls(list(friends) + [None] * (TEAM_SIZE - len(friends)))

    # -------------------------------------------------------------------------
    # Slot access
    # -------------------------------------------------------------------------

    def __getitem__(self, index: int) -> Optional[Friend]:
        return self.slots[index]

    def __iter__(self) -> Iterator[Optional[Friend]]:
        return iter(self.slots)

    def __len__(self) -> int:
        return TEAM_SIZE

    def take(self, index: int) -> Friend:
        """Detach and return the unit at ``index``."""
        friend = self.slots[index]
        if friend is None:
            raise ValueError(f"No friend at slot {index}")
        self.slots[index] = None
        return friend

    def place(self, index: int, friend: Friend) -> None:
        """Put ``friend`` into an empty slot."""
        if self.slots[index] is not None:
            raise ValueError(f"Slot {index} is already occupied")
        self.slots[index] = friend

    def friends(self) -> List[Friend]:
        return [f for f in self.slots if f is not None]

    def count(self) -> int:
        return sum(1 for f in self.slots if f is not None)

    def is_empty(self) -> bool:
        return self.count() == 0

    def is_full(self) -> bool:
        return self.count() == TEAM_SIZE

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def copy(self) -> Team:
        return Team([f.copy() if f is not None else None for f in self.slots])

    def key(self) -> Tuple[tuple, ...]:
        """Hashable, sortable identity; empty slots sort first."""
        return tuple(f.key() if f is not None else () for f in self.slots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Team):
            return NotImplemented
        return self.key() == other.key()

    def __lt__(self, other: Team) -> bool:
        return self.key() < other.key()

    __hash__ = None

    def without_exp(self) -> Team:
        """
        Copy with experience zeroed for every member. Useful when
        deduplicating teams, because exp doesn't matter in battle.
        """
        out = self.copy()
        for f in out.friends():
            f.exp = 0
        return out

    def compact_permutations(self) -> Iterator[Team]:
        """Every ordering of the current members, packed against slot 0."""
        members = self.friends()
        for order in itertools.permutations(members):
            yield Team.of(*(f.copy() for f in order))

    def is_dumb(self) -> bool:
        """
        A dumb team has at most three members, all with stock stats and no
        modifier. There's no reason to field it over a team with more units.
        """
        return self.count() <= 3 and all(
            f.modifier is None and f.has_default_power() for f in self.friends()
        )

    # -------------------------------------------------------------------------
    # Layout repair
    # -------------------------------------------------------------------------

    def compact(self) -> None:
        """Shuffle team members so they're tightly packed against 0."""
        members = self.friends()
        self.slots = members + [None] * (TEAM_SIZE - len(members))

    def make_space_at(self, i: int) -> bool:
        """
        Try to empty slot ``i`` by shoving units around.

        Shifts units backwards (away from 0) into the nearest empty slot
        behind ``i``; failing that, shifts units forwards from the nearest
        empty slot in front of ``i``. Returns False, leaving the team
        untouched, if the team is full.
        """
        if self.slots[i] is None:
            return True

        for j in range(i + 1, TEAM_SIZE):
            if self.slots[j] is None:
                for k in range(j - 1, i - 1, -1):
                    assert self.slots[k + 1] is None
                    self.slots[k + 1] = self.slots[k]
                    self.slots[k] = None
                assert self.slots[i] is None
                return True

        for j in range(i):
            if self.slots[j] is None:
                for k in range(j, i):
                    assert self.slots[k] is None
                    self.slots[k] = self.slots[k + 1]
                    self.slots[k + 1] = None
                assert self.slots[i] is None
                return True

        return False

    # -------------------------------------------------------------------------
    # Random selection
    # -------------------------------------------------------------------------

    def random_friends(self, n: int, dice: Dice) -> List[int]:
        """Pick up to ``n`` distinct occupied slots."""
        return pick_some(dice, n, self.slots)

    def random_friend(self, dice: Dice) -> Optional[int]:
        """Return a random occupied slot, or None if the team is empty."""
        return pick_one(dice, self.slots)

    def random_compatible_slot(self, species: Species, dice: Dice) -> Optional[int]:
        """Random slot that is empty or holds a unit of ``species``."""
        chosen = pick_where(
            dice, 1, self.slots,
            lambda f: f is None or f.species == species,
        )
        return chosen[0] if chosen else None

    # -------------------------------------------------------------------------
    # Triggers
    # -------------------------------------------------------------------------

    def summon(self, friend: Friend, pos: int, dice: Dice) -> None:
        """Place ``friend`` at ``pos`` and let every other unit react."""
        self.place(pos, friend)
        for i in range(TEAM_SIZE):
            if i != pos and self.slots[i] is not None:
                self.on_summon(i, pos, dice)

    def on_summon(self, i: int, pos: int, dice: Dice) -> None:
        """Ask the unit at ``i`` to react to a unit summoned at ``pos``."""
        assert i != pos
        friend = self.slots[i]
        if friend is None or self.slots[pos] is None:
            raise ValueError(f"Summon reaction needs units at {i} and {pos}")
        ctx = AbilityContext(team=self, slot=i, friend=friend, dice=dice, summoned=pos)
        execute_ability(TriggerHook.ON_SUMMON, ctx)

    def remove_dead(self, dice: Dice) -> None:
        """
        Remove dead units front to back, performing their on-death actions,
        then compact the team once.
        """
        changed = False
        for i in range(TEAM_SIZE):
            friend = self.slots[i]
            if friend is not None and friend.is_dead:
                self.take(i)
                logger.debug("%s at %d is dead, removing", friend.species.value, i)
                self.on_death(friend, i, dice)
                changed = True
        if changed:
            self.compact()

    def on_death(self, friend: Friend, i: int, dice: Dice) -> None:
        """Fire the species ability, then the modifier, of a unit removed from ``i``."""
        if self.slots[i] is not None:
            raise ValueError(f"Slot {i} must be vacated before on-death effects")
        ctx = AbilityContext(team=self, slot=i, friend=friend, dice=dice)
        execute_ability(TriggerHook.ON_DEATH, ctx)
        execute_modifier(TriggerHook.ON_DEATH, ctx)

    def __repr__(self) -> str:
        return f"Team({self.slots!r})"

    def __str__(self) -> str:
        from ..display import format_team
        return format_team(self, reverse=True)
