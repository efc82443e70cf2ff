"""
Shop Handler - the shop-phase state machine.

Handles all shop interactions for a single turn:
- Shop inventory generation and rerolls
- Buying units (placing into an empty slot, or combining with a match)
- Buying food for a unit
- Selling units
- Merging two units of the same species already on the team

Every decision is drawn from a Dice. Under DeterministicDice one call to
``step`` is one branch of the shop decision tree; ``enumerate_shop_outcomes``
wraps that for the discovery loop:

    dice = DeterministicDice()
    while dice.advance():
        outcome = enumerate_shop_outcomes(shop, dice)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from ..content.food import Food
from ..content.species import Species
from ..params import (
    FOOD_COST,
    FRIEND_COST,
    REROLL_COST,
    SHOP_FOOD_COUNT,
    SHOP_FRIEND_COUNT,
    STARTING_GOLD,
    TEAM_SIZE,
)
from ..registry import AbilityContext, TriggerHook, execute_ability, execute_food
from ..state.dice import Dice, pick_one
from ..state.friend import Friend
from ..state.team import Team

logger = logging.getLogger(__name__)


class ShopAction(Enum):
    """Shop actions, in the order they are drawn."""
    BUY_FRIEND = 0
    BUY_FOOD = 1
    SELL = 2
    REROLL = 3
    MERGE = 4


# ============================================================================
# SHOP STATE
# ============================================================================

@dataclass
class ShopState:
    """
    Team, gold and the current offers.

    Tracks:
    - The player's team
    - Gold left this turn
    - Unit offers (empty once bought)
    - Food offers (empty once bought)
    """
    team: Team = field(default_factory=Team)
    gold: int = STARTING_GOLD
    friends: List[Optional[Friend]] = field(default_factory=lambda: [None] * SHOP_FRIEND_COUNT)
    foods: List[Optional[Food]] = field(default_factory=lambda: [None] * SHOP_FOOD_COUNT)

    @classmethod
    def new(cls, dice: Dice) -> ShopState:
        """Fresh turn-one shop: empty team, starting gold, rolled offers."""
        shop = cls()
        shop.reroll(dice)
        return shop

    def copy(self) -> ShopState:
        return ShopState(
            team=self.team.copy(),
            gold=self.gold,
            friends=[f.copy() if f is not None else None for f in self.friends],
            foods=list(self.foods),
        )

    def key(self) -> tuple:
        """Hashable identity of the whole shop."""
        return (self.gold,) + self.without_gold_key()

    def without_gold_key(self) -> tuple:
        """Identity of everything but the gold balance."""
        return (
            self.team.key(),
            tuple(f.key() if f is not None else () for f in self.friends),
            tuple(f.value if f is not None else "" for f in self.foods),
        )

    # -------------------------------------------------------------------------
    # Offers
    # -------------------------------------------------------------------------

    def reroll(self, dice: Dice) -> None:
        """Resample every offer. Does not charge gold."""
        for i in range(SHOP_FRIEND_COUNT):
            self.friends[i] = Friend.new(Species.sample(dice))
        for i in range(SHOP_FOOD_COUNT):
            self.foods[i] = Food.sample(dice)

    def random_friend(self, dice: Dice) -> Optional[int]:
        """Pick a random offered unit, returning its shop index."""
        return pick_one(dice, self.friends)

    def random_food(self, dice: Dice) -> Optional[int]:
        """Pick a random offered food, returning its shop index."""
        return pick_one(dice, self.foods)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def combine_friends(self, team_pos: int, incoming: Friend) -> None:
        """Fold ``incoming`` into the same-species unit at ``team_pos``."""
        target = self.team[team_pos]
        if target is None:
            raise ValueError(f"No friend at slot {team_pos} to combine into")
        if target.species != incoming.species:
            raise ValueError(
                f"Cannot combine {incoming.species.value} into {target.species.value}"
            )
        logger.debug("Combining %s at position %d", target.species.value, team_pos)
        target.health = max(target.health, incoming.health) + 1
        target.attack = max(target.attack, incoming.attack) + 1
        target.exp += 1

    def buy_friend(self, shop_pos: int, team_pos: int, dice: Dice) -> None:
        """Buy the unit at ``shop_pos`` and put it at ``team_pos``."""
        if self.gold < FRIEND_COST:
            raise ValueError(f"Not enough gold ({self.gold}) to buy a friend")
        friend = self.friends[shop_pos]
        if friend is None:
            raise ValueError(f"No friend in shop slot {shop_pos}")

        self.gold -= FRIEND_COST
        self.friends[shop_pos] = None

        if self.team[team_pos] is None:
            logger.debug("Buying %s at position %d", friend.species.value, team_pos)
            self.on_buy(friend, team_pos, dice)
            self.team.summon(friend, team_pos, dice)
        else:
            logger.debug(
                "Buying and combining %s at position %d", friend.species.value, team_pos
            )
            self.combine_friends(team_pos, friend)

            # The on-buy trigger happens after the units are combined, which
            # matters when the unit levels up. The unit is lifted off the team
            # while it fires, then put back.
            combined = self.team.take(team_pos)
            self.on_buy(combined, team_pos, dice)
            self.team.place(team_pos, combined)

    def buy_food(self, shop_pos: int, team_pos: int, dice: Dice) -> None:
        """Buy the food at ``shop_pos`` and feed it to the unit at ``team_pos``."""
        food = self.foods[shop_pos]
        friend = self.team[team_pos]
        if food is None:
            raise ValueError(f"No food in shop slot {shop_pos}")
        if friend is None:
            raise ValueError(f"No friend at slot {team_pos} to feed")
        if self.gold < FOOD_COST:
            raise ValueError(f"Not enough gold ({self.gold}) to buy food")

        self.foods[shop_pos] = None
        self.gold -= FOOD_COST
        logger.debug(
            "Buying %s for %s at position %d", food.value, friend.species.value, team_pos
        )
        ctx = AbilityContext(team=self.team, slot=team_pos, friend=friend, dice=dice, shop=self)
        execute_food(food, ctx)

    def sell_friend(self, team_pos: int, dice: Dice) -> None:
        """Sell the unit at ``team_pos`` for gold equal to its level."""
        friend = self.team.take(team_pos)
        logger.debug("Selling %s at position %d", friend.species.value, team_pos)

        self.gold += friend.level
        self.on_sell(friend, team_pos, dice)
        for i in range(TEAM_SIZE):
            if i != team_pos and self.team[i] is not None:
                self.on_sold(i, dice)

    def merge_candidates(self) -> List[List[int]]:
        """For each slot, the other slots holding the same species."""
        targets: List[List[int]] = [[] for _ in range(TEAM_SIZE)]
        for i in range(TEAM_SIZE):
            for j in range(i + 1, TEAM_SIZE):
                a = self.team[i]
                b = self.team[j]
                if a is not None and b is not None and a.species == b.species:
                    targets[i].append(j)
                    targets[j].append(i)
        return targets

    # -------------------------------------------------------------------------
    # Triggers
    # -------------------------------------------------------------------------

    def on_buy(self, friend: Friend, team_pos: int, dice: Dice) -> None:
        """On-buy ability. ``friend`` is not on the team at this point."""
        ctx = AbilityContext(team=self.team, slot=team_pos, friend=friend, dice=dice, shop=self)
        execute_ability(TriggerHook.ON_BUY, ctx)

    def on_sell(self, friend: Friend, team_pos: int, dice: Dice) -> None:
        """On-sell ability. ``friend`` has been removed from the team."""
        ctx = AbilityContext(team=self.team, slot=team_pos, friend=friend, dice=dice, shop=self)
        execute_ability(TriggerHook.ON_SELL, ctx)

    def on_sold(self, i: int, dice: Dice) -> None:
        """Reaction of the unit at ``i`` to a teammate being sold."""
        ctx = AbilityContext(team=self.team, slot=i, friend=self.team[i], dice=dice, shop=self)
        execute_ability(TriggerHook.ON_SOLD, ctx)

    # -------------------------------------------------------------------------
    # Step
    # -------------------------------------------------------------------------

    def step(self, dice: Dice) -> bool:
        """
        Take one random action.

        Returns True when the drawn action has no legal target, which ends
        this branch of shop exploration.
        """
        action = ShopAction(dice.roll(0, len(ShopAction)))

        if action == ShopAction.BUY_FRIEND:
            if self.gold < FRIEND_COST:
                logger.debug("Not enough gold to buy a friend; exiting")
                return True
            i = self.random_friend(dice)
            if i is None:
                logger.debug("No friends in the shop; exiting")
                return True
            species = self.friends[i].species
            j = self.team.random_compatible_slot(species, dice)
            if j is None:
                logger.debug("No slot compatible with %s; exiting", species.value)
                return True
            self.buy_friend(i, j, dice)

        elif action == ShopAction.BUY_FOOD:
            if self.gold < FOOD_COST:
                logger.debug("Not enough gold to buy food; exiting")
                return True
            i = self.random_food(dice)
            if i is None:
                logger.debug("No food in the shop; exiting")
                return True
            j = self.team.random_friend(dice)
            if j is None:
                logger.debug("No friends to feed; exiting")
                return True
            self.buy_food(i, j, dice)

        elif action == ShopAction.SELL:
            j = self.team.random_friend(dice)
            if j is None:
                logger.debug("No friends to sell; exiting")
                return True
            self.sell_friend(j, dice)

        elif action == ShopAction.REROLL:
            if self.gold < REROLL_COST:
                logger.debug("No gold to reroll; exiting")
                return True
            logger.debug("Re-rolling shop")
            self.reroll(dice)
            self.gold -= REROLL_COST

        elif action == ShopAction.MERGE:
            targets = self.merge_candidates()
            sources = [i for i in range(TEAM_SIZE) if targets[i]]
            if not sources:
                logger.debug("No friends to combine; exiting")
                return True
            i = sources[dice.roll(0, len(sources))]
            j = targets[i][dice.roll(0, len(targets[i]))]
            friend = self.team.take(i)
            logger.debug("Merging %s at %d into %d", friend.species.value, i, j)
            self.combine_friends(j, friend)

        self.team.compact()
        return False

    def __str__(self) -> str:
        from ..display import format_shop
        return format_shop(self)


class ShopOutcome(NamedTuple):
    """Result of one exploration step from a shop."""
    team: Team
    done: bool
    shop: ShopState


def enumerate_shop_outcomes(shop: ShopState, dice: Dice) -> ShopOutcome:
    """
    Run one step on a copy of ``shop``.

    Call once per ``dice.advance()``; with DeterministicDice the loop visits
    every outcome of the step exactly once.
    """
    branch = shop.copy()
    done = branch.step(dice)
    return ShopOutcome(team=branch.team, done=done, shop=branch)


def run_random_turn(shop: ShopState, dice: Dice, max_steps: int = 100) -> Tuple[ShopState, int]:
    """Take random actions on a copy of ``shop`` until one fails. Returns the shop and step count."""
    branch = shop.copy()
    steps = 0
    while steps < max_steps and not branch.step(dice):
        steps += 1
    return branch, steps
