"""
Choice sources for the simulator.

Every random decision in the shop and in battle goes through ``Dice.roll``.
Two implementations exist:

- RandomDice: ordinary pseudo-random draws, for sampling.
- DeterministicDice: replays a recorded prefix of choices and then takes the
  lowest value at every new decision point. Calling ``advance()`` between runs
  bumps the last choice like an odometer, so a ``while dice.advance()`` loop
  walks every path through the decision tree exactly once, discovering the
  tree lazily as the simulation runs.

Usage:
    dice = DeterministicDice()
    while dice.advance():
        shop = ShopState.new(dice)
        ...
"""

from __future__ import annotations

import random
import string
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

# Digits used by DeterministicDice.key(), matching int(c, 36)
_KEY_DIGITS = string.digits + string.ascii_lowercase


class Dice:
    """A source of bounded random integers."""

    def roll(self, start: int, stop: int) -> int:
        """Draw an integer from the half-open range [start, stop)."""
        raise NotImplementedError("Subclass must implement roll()")


class RandomDice(Dice):
    """Uniform random draws backed by ``random.Random``."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def roll(self, start: int, stop: int) -> int:
        if stop <= start:
            raise ValueError(f"Cannot roll from empty range [{start}, {stop})")
        return self._rng.randrange(start, stop)

    def __repr__(self) -> str:
        return f"RandomDice(seed={self.seed})"


class DeterministicDice(Dice):
    """
    Exhaustive choice enumerator.

    History is a stack of ``(start, stop, value)`` triples, one per decision
    point reached in the current run. Triples loaded from a key have unknown
    ranges (``None``) until they are replayed once.
    """

    def __init__(self):
        self.initialized = False
        self.index = 0
        self.data: List[Tuple[Optional[int], Optional[int], int]] = []

    # ------------------------------------------------------------------
    # Odometer
    # ------------------------------------------------------------------

    def advance(self) -> bool:
        """
        Move to the next unvisited path.

        The first call only marks the dice as started, so the first run
        happens with an empty history. Afterwards the last decision is
        incremented; decisions that overflow their range are dropped and the
        carry moves to the one before. Returns False once every path has
        been visited.
        """
        if not self.initialized:
            self.initialized = True
            return True

        while self.data:
            start, stop, value = self.data.pop()
            value += 1
            # Entries loaded from a key but never replayed have no range yet
            if stop is None or value >= stop:
                continue
            self.data.append((start, stop, value))
            break
        self.index = 0
        return bool(self.data)

    def roll(self, start: int, stop: int) -> int:
        if stop <= start:
            raise ValueError(f"Cannot roll from empty range [{start}, {stop})")

        if self.index < len(self.data):
            lo, hi, value = self.data[self.index]
            if lo is None:
                # Loaded from a key; learn the range on first replay
                lo, hi = start, stop
                self.data[self.index] = (lo, hi, value)
            if (lo, hi) != (start, stop):
                raise ValueError(
                    f"Replay mismatch at decision {self.index}: recorded "
                    f"[{lo}, {hi}) but asked for [{start}, {stop})"
                )
            if not start <= value < stop:
                raise ValueError(
                    f"Replayed value {value} outside [{start}, {stop}) "
                    f"at decision {self.index}"
                )
        else:
            value = start
            self.data.append((start, stop, value))

        self.index += 1
        return value

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Number of decisions recorded for the current path."""
        return len(self.data)

    @property
    def history(self) -> List[int]:
        """Chosen values of the current path, in draw order."""
        return [value for _, _, value in self.data]

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def key(self) -> str:
        """
        Encode the current path as a base-36 string, one character per
        decision. Ranges are not stored, to keep keys short.
        """
        out = []
        for _, _, value in self.data:
            if value >= len(_KEY_DIGITS):
                raise ValueError(f"Choice {value} cannot be encoded in a key")
            out.append(_KEY_DIGITS[value])
        return "".join(out)

    @classmethod
    def from_key(cls, key: str) -> DeterministicDice:
        """Build a dice that replays the path encoded by ``key``."""
        dice = cls()
        dice.initialized = True
        dice.data = [(None, None, int(c, 36)) for c in key]
        return dice

    def __repr__(self) -> str:
        return f"DeterministicDice(index={self.index}, data={self.data})"


# =============================================================================
# Selection helpers
# =============================================================================

def pick_where(
    dice: Dice,
    n: int,
    values: Sequence[T],
    predicate: Callable[[T], bool],
) -> List[int]:
    """
    Choose up to ``n`` distinct indices ``i`` where ``predicate(values[i])``.

    The k-th draw picks uniformly among the candidates not chosen yet, so the
    range shrinks by one per draw. Under DeterministicDice a full enumeration
    visits every ordered selection exactly once.
    """
    mask = [bool(predicate(v)) for v in values]
    count = sum(mask)
    n = min(n, count)

    chosen = []
    for k in range(n):
        j = dice.roll(0, count - k)
        remaining = [i for i, m in enumerate(mask) if m]
        i = remaining[j]
        mask[i] = False
        chosen.append(i)
    return chosen


def pick_some(dice: Dice, n: int, values: Sequence[Optional[T]]) -> List[int]:
    """Choose up to ``n`` indices of entries that are not None."""
    return pick_where(dice, n, values, lambda v: v is not None)


def pick_one(dice: Dice, values: Sequence[Optional[T]]) -> Optional[int]:
    """Choose one index of an entry that is not None, or None if all are empty."""
    chosen = pick_some(dice, 1, values)
    return chosen[0] if chosen else None
