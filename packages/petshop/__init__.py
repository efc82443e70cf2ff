"""
Pet Shop Engine

A model of the first turn of a shop-and-battle auto-battler, built to answer
"which team should I build?" by brute force.

Core subsystems:
- state: choice sources (random and exhaustive), units, teams
- content: species catalog, modifiers, food
- registry: per-species triggered abilities
- handlers: shop-phase state machine
- combat_engine: automatic battles
- simulation: team discovery, pairwise scoring, caching

Usage:
    from packages.petshop import DeterministicDice, ShopState, Battle

    dice = DeterministicDice()
    while dice.advance():
        shop = ShopState.new(dice)

    winner = Battle(team_a, team_b).run(RandomDice(seed=1))
"""

__version__ = "0.1.0"

# Choice sources and team state
from .state import (
    Dice, RandomDice, DeterministicDice, pick_where, pick_some, pick_one,
    Friend, Team,
)

# Content
from .content import Species, Modifier, Food, SPECIES_DATA

# Abilities
from .registry import TriggerHook, AbilityContext, ABILITY_REGISTRY

# Shop phase
from .handlers import ShopAction, ShopState, ShopOutcome, enumerate_shop_outcomes

# Battle
from .combat_engine import Battle, BattlePhase, Winner

# Rendering
from .display import format_team, format_battle, format_shop

__all__ = [
    "Dice", "RandomDice", "DeterministicDice", "pick_where", "pick_some", "pick_one",
    "Friend", "Team",
    "Species", "Modifier", "Food", "SPECIES_DATA",
    "TriggerHook", "AbilityContext", "ABILITY_REGISTRY",
    "ShopAction", "ShopState", "ShopOutcome", "enumerate_shop_outcomes",
    "Battle", "BattlePhase", "Winner",
    "format_team", "format_battle", "format_shop",
]
