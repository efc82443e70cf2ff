"""
Shared pytest fixtures for the pet shop test suite.

This module provides reusable fixtures for:
- Dice (exhaustive and seeded)
- Unit and team construction
- Shop states with chosen offers
- Enumerating every path of a decision function
"""

import os
import sys

import pytest

# Ensure project root is in path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from packages.petshop.content import Food, Modifier, Species
from packages.petshop.handlers.shop_handler import ShopState
from packages.petshop.state.dice import DeterministicDice, RandomDice
from packages.petshop.state.friend import Friend
from packages.petshop.state.team import Team


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# =============================================================================
# Dice Fixtures
# =============================================================================


@pytest.fixture
def dice():
    """Exhaustive dice on its first path: every new decision takes the lowest value."""
    d = DeterministicDice()
    d.advance()
    return d


@pytest.fixture
def seeded_dice():
    """RandomDice with seed 42 for reproducible sampling."""
    return RandomDice(42)


@pytest.fixture
def enumerate_paths():
    """Run ``fn(dice)`` once per path of the decision tree, collecting results."""
    def run(fn):
        d = DeterministicDice()
        results = []
        while d.advance():
            results.append(fn(d))
        return results
    return run


# =============================================================================
# Unit and Team Fixtures
# =============================================================================


def make_friend(species, health=None, attack=None, modifier=None, exp=0):
    """Unit with catalog stats unless overridden."""
    data = species.data
    return Friend(
        species=species,
        health=data.health if health is None else health,
        attack=data.attack if attack is None else attack,
        modifier=modifier,
        exp=exp,
    )


@pytest.fixture
def friend():
    """Factory for units: friend(Species.ANT, health=1)."""
    return make_friend


@pytest.fixture
def team_of():
    """Factory for compact teams: team_of(Species.ANT, Species.FISH)."""
    def build(*members):
        friends = [m if isinstance(m, Friend) else make_friend(m) for m in members]
        return Team.of(*friends)
    return build


@pytest.fixture
def default_trio(team_of):
    """Three stock units, no modifiers."""
    return team_of(Species.FISH, Species.PIG, Species.HORSE)


@pytest.fixture
def honey_fish():
    """Fish carrying the Honey modifier."""
    return make_friend(Species.FISH, modifier=Modifier.HONEY)


# =============================================================================
# Shop Fixtures
# =============================================================================


@pytest.fixture
def shop_with():
    """Factory for shops with explicit offers, team and gold."""
    def build(offers=(Species.ANT, Species.BEAVER, Species.CRICKET),
              foods=(Food.APPLE,), team=None, gold=10):
        return ShopState(
            team=team if team is not None else Team(),
            gold=gold,
            friends=[Friend.new(s) if s is not None else None for s in offers],
            foods=list(foods),
        )
    return build
