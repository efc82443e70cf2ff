"""
Ability, modifier and food handlers.

Each handler is registered via decorator and looked up by the team, shop and
battle code when the corresponding hook fires. Organized by trigger hook.
"""

from __future__ import annotations

import logging

from . import (
    AbilityContext, TriggerHook, ability, food_effect, modifier_trigger,
)
from ..content.food import Food
from ..content.modifiers import Modifier
from ..content.species import Species
from ..state.friend import Friend

logger = logging.getLogger(__name__)


# =============================================================================
# ON_BUY
# =============================================================================

@ability(TriggerHook.ON_BUY, species=Species.OTTER, randomized=True)
def otter_buy(ctx: AbilityContext) -> None:
    """Otter: Give a random friend +1 attack and +1 health."""
    for i in ctx.random_friends(1):
        ctx.buff(ctx.team[i], attack=1, health=1)


# =============================================================================
# ON_SELL
# =============================================================================

@ability(TriggerHook.ON_SELL, species=Species.BEAVER, randomized=True)
def beaver_sell(ctx: AbilityContext) -> None:
    """Beaver: Give two random friends +level health."""
    for i in ctx.random_friends(2):
        ctx.buff(ctx.team[i], health=ctx.level)


@ability(TriggerHook.ON_SELL, species=Species.DUCK)
def duck_sell(ctx: AbilityContext) -> None:
    """Duck: Give every unit in the shop +level health."""
    for f in ctx.shop_friends:
        ctx.buff(f, health=ctx.level)


@ability(TriggerHook.ON_SELL, species=Species.PIG)
def pig_sell(ctx: AbilityContext) -> None:
    """Pig: Gain +level gold."""
    ctx.gain_gold(ctx.level)


# =============================================================================
# ON_SUMMON
# =============================================================================

@ability(TriggerHook.ON_SUMMON, species=Species.HORSE)
def horse_summon(ctx: AbilityContext) -> None:
    """Horse: Give the summoned friend +1 attack and +1 health."""
    # Temporary in the real game, but only one turn is simulated
    ctx.buff(ctx.team[ctx.summoned], attack=1, health=1)


# =============================================================================
# ON_BATTLE_START
# =============================================================================

@ability(TriggerHook.ON_BATTLE_START, species=Species.MOSQUITO, randomized=True)
def mosquito_battle_start(ctx: AbilityContext) -> None:
    """Mosquito: Deal 1 damage to `level` random enemies."""
    for j in ctx.random_enemies(ctx.level):
        target = ctx.enemy[j]
        logger.debug(
            "%s at %d shot %s at %d for 1",
            ctx.friend.species.value, ctx.slot, target.species.value, j,
        )
        target.health = max(0, target.health - 1)


# =============================================================================
# ON_DEATH
# =============================================================================

@ability(TriggerHook.ON_DEATH, species=Species.CRICKET)
def cricket_death(ctx: AbilityContext) -> None:
    """Cricket: Summon a level/level Zombie Cricket in its place."""
    ghost = Friend.summoned(Species.GHOST_CRICKET, health=ctx.level, attack=ctx.level)
    logger.debug("Summoning %s at %d", ghost.species.value, ctx.slot)
    ctx.summon(ghost, ctx.slot)


@ability(TriggerHook.ON_DEATH, species=Species.ANT, randomized=True)
def ant_death(ctx: AbilityContext) -> None:
    """Ant: Give a random friend +2*level attack and +level health."""
    j = ctx.random_friend()
    if j is not None:
        ctx.buff(ctx.team[j], attack=2 * ctx.level, health=ctx.level)


@modifier_trigger(TriggerHook.ON_DEATH, modifier=Modifier.HONEY)
def honey_death(ctx: AbilityContext) -> None:
    """Honey: Summon a 1/1 Bee where the unit died, if there is room."""
    bee = Friend.summoned(Species.BEE, health=1, attack=1)
    if ctx.team.make_space_at(ctx.slot):
        logger.debug("Summoning %s at %d", bee.species.value, ctx.slot)
        ctx.summon(bee, ctx.slot)
    else:
        logger.debug("No room to summon %s", bee.species.value)


# =============================================================================
# Food
# =============================================================================

@food_effect(Food.APPLE)
def apple(ctx: AbilityContext) -> None:
    """Apple: +1 attack, +1 health."""
    logger.debug("    Buffing %s by health +1, attack +1", ctx.friend.species.value)
    ctx.friend.attack += 1
    ctx.friend.health += 1


@food_effect(Food.HONEY)
def honey(ctx: AbilityContext) -> None:
    """Honey: Attach the Honey modifier, replacing any other."""
    logger.debug("    Applying honey modifier to %s", ctx.friend.species.value)
    ctx.friend.modifier = Modifier.HONEY
