"""
Combat Engine - automatic battle between two teams.

Handles:
1. Pre-battle triggers (team A front to back, then team B), followed by a
   single dead-unit sweep on each side
2. The clash loop: both front units hit each other simultaneously, then dead
   units are removed and their on-death effects fire
3. Termination: the team that runs out of units loses; both at once is a tie

Design principles:
- A Battle owns copies of both teams; the caller's teams are never mutated
- Random abilities draw from the Dice passed to ``run``; a battle with no
  random ability (``is_deterministic``) needs to be simulated only once

Usage:
    from packages.petshop.combat_engine import Battle, Winner

    battle = Battle(team_a, team_b)
    winner = battle.run(RandomDice(seed=1))
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .params import TEAM_SIZE
from .registry import AbilityContext, TriggerHook, execute_ability, is_randomized_in_battle
from .state.dice import Dice
from .state.team import Team

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================

class Winner(Enum):
    """Outcome of a finished battle."""
    TEAM_A = "TEAM_A"
    TEAM_B = "TEAM_B"
    TIED = "TIED"


class BattlePhase(Enum):
    """Current phase of a battle."""
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    WIN_A = "WIN_A"
    WIN_B = "WIN_B"
    TIED = "TIED"


_PHASE_WINNERS = {
    BattlePhase.WIN_A: Winner.TEAM_A,
    BattlePhase.WIN_B: Winner.TEAM_B,
    BattlePhase.TIED: Winner.TIED,
}


# =============================================================================
# BATTLE
# =============================================================================

class Battle:
    """
    A pair of teams fighting each other.

    ``team_a`` is the attacker's side: its pre-battle triggers fire first.
    """

    def __init__(self, team_a: Team, team_b: Team):
        self.team_a = team_a.copy()
        self.team_b = team_b.copy()
        self.phase = BattlePhase.NOT_STARTED
        self.clashes = 0

    def copy(self) -> Battle:
        out = Battle(self.team_a, self.team_b)
        out.phase = self.phase
        out.clashes = self.clashes
        return out

    def is_deterministic(self) -> bool:
        """True if no unit on either side has an ability that draws from the dice."""
        return not any(
            is_randomized_in_battle(f)
            for f in self.team_a.friends() + self.team_b.friends()
        )

    @property
    def winner(self) -> Optional[Winner]:
        return _PHASE_WINNERS.get(self.phase)

    def run(self, dice: Dice) -> Winner:
        """Simulate the battle to the end, returning the winner."""
        if self.phase != BattlePhase.NOT_STARTED:
            raise ValueError(f"Battle already run (phase {self.phase.value})")

        logger.debug("Initial state:\n%s", self)
        self.before_battle(dice)
        self.phase = BattlePhase.IN_PROGRESS

        while not self.check_over():
            logger.debug("Round %d:\n%s", self.clashes, self)
            self.clash(dice)

        logger.debug("Battle ended: %s", self.phase.value)
        return self.winner

    def check_over(self) -> bool:
        """Update the phase from the team states; True once the battle is over."""
        a_empty = self.team_a.is_empty()
        b_empty = self.team_b.is_empty()
        if a_empty and b_empty:
            self.phase = BattlePhase.TIED
        elif b_empty:
            self.phase = BattlePhase.WIN_A
        elif a_empty:
            self.phase = BattlePhase.WIN_B
        return self.phase != BattlePhase.IN_PROGRESS

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def before_battle(self, dice: Dice) -> None:
        """Fire every battle-start ability, then sweep the dead once per side."""
        for own, enemy in ((self.team_a, self.team_b), (self.team_b, self.team_a)):
            for i in range(TEAM_SIZE):
                self.on_battle_start(own, enemy, i, dice)
        # Kills here are not re-resolved: a pre-battle kill that would itself
        # trigger more pre-battle damage is not modelled.
        self.team_a.remove_dead(dice)
        self.team_b.remove_dead(dice)

    def on_battle_start(self, own: Team, enemy: Team, i: int, dice: Dice) -> None:
        friend = own[i]
        if friend is None:
            return
        ctx = AbilityContext(team=own, slot=i, friend=friend, dice=dice, enemy=enemy)
        execute_ability(TriggerHook.ON_BATTLE_START, ctx)

    def clash(self, dice: Dice) -> None:
        """Front units hit each other at the same time."""
        f = self.team_a[0]
        g = self.team_b[0]
        if f is None or g is None:
            raise ValueError("Clash needs a unit at the front of both teams")

        logger.debug("%s clashes with %s!", f.species.value, g.species.value)
        f.health = max(0, f.health - g.attack)
        g.health = max(0, g.health - f.attack)
        self.clashes += 1

        self.team_a.remove_dead(dice)
        self.team_b.remove_dead(dice)

    def __str__(self) -> str:
        from .display import format_battle
        return format_battle(self)
