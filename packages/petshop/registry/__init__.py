"""
Ability Registry for the pet shop engine.

Provides decorator-based registration for triggered effects:
- Species abilities (on buy, on sell, on summon, on death, battle start)
- Modifier effects (currently only Honey on death)
- Food effects (applied when food is bought for a unit)

Species without a handler for a hook simply do nothing, so adding a species
never touches the shop or battle code.

Usage:
    from packages.petshop.registry import ability, TriggerHook

    @ability(TriggerHook.ON_SELL, species=Species.PIG)
    def pig_sell(ctx: AbilityContext) -> None:
        ctx.gain_gold(ctx.level)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import (
    Callable, Dict, Hashable, List, Optional, Tuple, TYPE_CHECKING
)

from ..content.food import Food
from ..content.modifiers import Modifier
from ..content.species import Species

if TYPE_CHECKING:
    from ..handlers.shop_handler import ShopState
    from ..state.dice import Dice
    from ..state.friend import Friend
    from ..state.team import Team

logger = logging.getLogger(__name__)


# =============================================================================
# Trigger Hooks
# =============================================================================

class TriggerHook(Enum):
    """All trigger points."""
    # Shop phase
    ON_BUY = "onBuy"  # Unit bought; not on the team yet
    ON_SELL = "onSell"  # Unit sold; already removed from the team
    ON_SOLD = "onSold"  # Another unit on the team was sold
    ON_EAT = "onEat"  # Food applied to a unit

    # Both phases
    ON_SUMMON = "onSummon"  # Another unit was placed on the team

    # Battle phase
    ON_BATTLE_START = "onBattleStart"
    ON_DEATH = "onDeath"  # Unit removed at 0 health


# Hooks that can fire while a battle is being resolved
BATTLE_HOOKS = (TriggerHook.ON_BATTLE_START, TriggerHook.ON_DEATH, TriggerHook.ON_SUMMON)


# =============================================================================
# Context
# =============================================================================

@dataclass
class AbilityContext:
    """
    Context passed to trigger handlers.

    ``friend`` is the unit whose effect fires and ``slot`` its team position
    (for sold or dead units, the slot it just left). ``shop`` is set during
    the shop phase, ``enemy`` during battle, ``summoned`` for ON_SUMMON.
    """
    team: Team
    slot: int
    friend: Friend
    dice: Dice
    shop: Optional[ShopState] = None
    enemy: Optional[Team] = None
    summoned: int = -1

    @property
    def level(self) -> int:
        return self.friend.level

    def random_friends(self, n: int) -> List[int]:
        return self.team.random_friends(n, self.dice)

    def random_friend(self) -> Optional[int]:
        return self.team.random_friend(self.dice)

    def random_enemies(self, n: int) -> List[int]:
        if self.enemy is None:
            raise ValueError("No enemy team outside of battle")
        return self.enemy.random_friends(n, self.dice)

    def buff(self, target: Friend, attack: int = 0, health: int = 0) -> None:
        logger.debug(
            "    %s buffs %s by health +%d, attack +%d",
            self.friend.species.value, target.species.value, health, attack,
        )
        target.attack += attack
        target.health += health

    def summon(self, friend: Friend, pos: int) -> None:
        self.team.summon(friend, pos, self.dice)

    def gain_gold(self, amount: int) -> None:
        if self.shop is None:
            raise ValueError("No shop outside of the shop phase")
        logger.debug("    %s gives gold +%d", self.friend.species.value, amount)
        self.shop.gold += amount

    @property
    def shop_friends(self) -> List[Friend]:
        if self.shop is None:
            return []
        return [f for f in self.shop.friends if f is not None]


# =============================================================================
# Registry Classes
# =============================================================================

class TriggerRegistry:
    """Registry of trigger handlers keyed by hook and entity."""

    def __init__(self, name: str):
        self.name = name
        # handlers[hook][entity] = (handler_func, randomized)
        self._handlers: Dict[TriggerHook, Dict[Hashable, Tuple[Callable, bool]]] = {}

    def register(self, hook: TriggerHook, entity: Hashable, handler: Callable,
                 randomized: bool = False):
        """Register a handler for a hook."""
        if hook not in self._handlers:
            self._handlers[hook] = {}
        self._handlers[hook][entity] = (handler, randomized)

    def get_handler(self, hook: TriggerHook, entity: Hashable) -> Optional[Callable]:
        """Get a specific handler."""
        if hook in self._handlers and entity in self._handlers[hook]:
            return self._handlers[hook][entity][0]
        return None

    def has_handler(self, hook: TriggerHook, entity: Hashable) -> bool:
        return hook in self._handlers and entity in self._handlers[hook]

    def is_randomized(self, hook: TriggerHook, entity: Hashable) -> bool:
        """Whether the handler draws from the dice."""
        if not self.has_handler(hook, entity):
            return False
        return self._handlers[hook][entity][1]

    def list_hooks(self) -> List[TriggerHook]:
        return list(self._handlers.keys())

    def list_entities(self, hook: TriggerHook) -> List[Hashable]:
        return list(self._handlers.get(hook, {}).keys())


# Global registries
ABILITY_REGISTRY = TriggerRegistry("abilities")
MODIFIER_REGISTRY = TriggerRegistry("modifiers")
FOOD_REGISTRY = TriggerRegistry("food")


# =============================================================================
# Decorators
# =============================================================================

def ability(hook: TriggerHook, species: Species, randomized: bool = False):
    """
    Decorator to register a species ability.

    Args:
        hook: Trigger point
        species: Species the handler belongs to
        randomized: True if the handler draws from the dice
    """
    def decorator(func: Callable[[AbilityContext], None]) -> Callable:
        ABILITY_REGISTRY.register(hook, species, func, randomized)
        return func
    return decorator


def modifier_trigger(hook: TriggerHook, modifier: Modifier, randomized: bool = False):
    """Decorator to register a modifier effect."""
    def decorator(func: Callable[[AbilityContext], None]) -> Callable:
        MODIFIER_REGISTRY.register(hook, modifier, func, randomized)
        return func
    return decorator


def food_effect(food: Food):
    """Decorator to register what a food does to the unit that eats it."""
    def decorator(func: Callable[[AbilityContext], None]) -> Callable:
        FOOD_REGISTRY.register(TriggerHook.ON_EAT, food, func)
        return func
    return decorator


# =============================================================================
# Execution Functions
# =============================================================================

def execute_ability(hook: TriggerHook, ctx: AbilityContext) -> None:
    """Run the triggering unit's species handler for ``hook``, if any."""
    handler = ABILITY_REGISTRY.get_handler(hook, ctx.friend.species)
    if handler is not None:
        handler(ctx)


def execute_modifier(hook: TriggerHook, ctx: AbilityContext) -> None:
    """Run the triggering unit's modifier handler for ``hook``, if any."""
    if ctx.friend.modifier is None:
        return
    handler = MODIFIER_REGISTRY.get_handler(hook, ctx.friend.modifier)
    if handler is not None:
        handler(ctx)


def execute_food(food: Food, ctx: AbilityContext) -> None:
    """Apply ``food`` to ``ctx.friend``."""
    handler = FOOD_REGISTRY.get_handler(TriggerHook.ON_EAT, food)
    if handler is None:
        raise ValueError(f"No effect handler for food: {food.value}")
    handler(ctx)


def is_randomized_in_battle(friend: Friend) -> bool:
    """Whether this unit can draw from the dice while a battle resolves."""
    for hook in BATTLE_HOOKS:
        if ABILITY_REGISTRY.is_randomized(hook, friend.species):
            return True
        if friend.modifier is not None and MODIFIER_REGISTRY.is_randomized(hook, friend.modifier):
            return True
    return False


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "TriggerHook",
    "BATTLE_HOOKS",
    "AbilityContext",
    "TriggerRegistry",
    "ABILITY_REGISTRY",
    "MODIFIER_REGISTRY",
    "FOOD_REGISTRY",
    "ability",
    "modifier_trigger",
    "food_effect",
    "execute_ability",
    "execute_modifier",
    "execute_food",
    "is_randomized_in_battle",
]

# Import handlers to register them (decorators populate the registries)
from . import abilities as _abilities  # noqa: F401, E402
