"""
Trigger registry tests.

Verifies that every species ability, modifier and food is registered on
the expected hook, that randomized handlers are flagged, and that the
execution helpers dispatch (or quietly skip) correctly.
"""

import pytest

from packages.petshop.content import Food, Modifier, Species
from packages.petshop.registry import (
    ABILITY_REGISTRY,
    FOOD_REGISTRY,
    MODIFIER_REGISTRY,
    AbilityContext,
    TriggerHook,
    TriggerRegistry,
    execute_ability,
    execute_food,
    is_randomized_in_battle,
)
from packages.petshop.state.friend import Friend
from packages.petshop.state.team import Team


class TestRegistration:
    """Which handlers exist."""

    @pytest.mark.parametrize("hook,species,randomized", [
        (TriggerHook.ON_BUY, Species.OTTER, True),
        (TriggerHook.ON_SELL, Species.BEAVER, True),
        (TriggerHook.ON_SELL, Species.DUCK, False),
        (TriggerHook.ON_SELL, Species.PIG, False),
        (TriggerHook.ON_SUMMON, Species.HORSE, False),
        (TriggerHook.ON_BATTLE_START, Species.MOSQUITO, True),
        (TriggerHook.ON_DEATH, Species.CRICKET, False),
        (TriggerHook.ON_DEATH, Species.ANT, True),
    ])
    def test_species_abilities(self, hook, species, randomized):
        assert ABILITY_REGISTRY.has_handler(hook, species)
        assert ABILITY_REGISTRY.is_randomized(hook, species) == randomized

    def test_fish_has_no_abilities(self):
        for hook in ABILITY_REGISTRY.list_hooks():
            assert Species.FISH not in ABILITY_REGISTRY.list_entities(hook)

    def test_honey_modifier(self):
        assert MODIFIER_REGISTRY.has_handler(TriggerHook.ON_DEATH, Modifier.HONEY)
        assert not MODIFIER_REGISTRY.is_randomized(TriggerHook.ON_DEATH, Modifier.HONEY)

    def test_every_food_has_effect(self):
        for food in Food:
            assert FOOD_REGISTRY.has_handler(TriggerHook.ON_EAT, food)


class TestTriggerRegistry:
    """Registry mechanics on a private instance."""

    def test_register_and_lookup(self):
        registry = TriggerRegistry("test")
        calls = []
        registry.register(TriggerHook.ON_SELL, "x", calls.append, randomized=True)
        handler = registry.get_handler(TriggerHook.ON_SELL, "x")
        handler(1)
        assert calls == [1]
        assert registry.is_randomized(TriggerHook.ON_SELL, "x")
        assert registry.list_hooks() == [TriggerHook.ON_SELL]
        assert registry.list_entities(TriggerHook.ON_SELL) == ["x"]

    def test_missing_handler(self):
        registry = TriggerRegistry("test")
        assert registry.get_handler(TriggerHook.ON_BUY, "x") is None
        assert not registry.is_randomized(TriggerHook.ON_BUY, "x")
        assert registry.list_entities(TriggerHook.ON_BUY) == []


class TestExecution:
    """Dispatch helpers."""

    def test_no_handler_is_noop(self, team_of, dice):
        team = team_of(Species.FISH, Species.PIG)
        ctx = AbilityContext(team=team, slot=0, friend=team[0], dice=dice)
        before = team.key()
        execute_ability(TriggerHook.ON_BUY, ctx)
        assert team.key() == before

    def test_food_dispatch(self, team_of, dice):
        team = team_of(Species.PIG)
        ctx = AbilityContext(team=team, slot=0, friend=team[0], dice=dice)
        execute_food(Food.APPLE, ctx)
        assert (team[0].health, team[0].attack) == (4, 2)

    def test_gold_needs_shop(self, team_of, dice):
        team = team_of(Species.PIG)
        ctx = AbilityContext(team=team, slot=0, friend=team[0], dice=dice)
        with pytest.raises(ValueError):
            ctx.gain_gold(1)

    def test_enemies_need_battle(self, team_of, dice):
        team = team_of(Species.MOSQUITO)
        ctx = AbilityContext(team=team, slot=0, friend=team[0], dice=dice)
        with pytest.raises(ValueError):
            ctx.random_enemies(1)

    def test_shop_friends_outside_shop(self, team_of, dice):
        team = team_of(Species.DUCK)
        ctx = AbilityContext(team=team, slot=0, friend=team[0], dice=dice)
        assert ctx.shop_friends == []

    def test_mosquito_damage_saturates(self, team_of, friend, dice):
        own = team_of(Species.MOSQUITO)
        enemy = Team.of(friend(Species.FISH, health=0))
        ctx = AbilityContext(team=own, slot=0, friend=own[0], dice=dice, enemy=enemy)
        execute_ability(TriggerHook.ON_BATTLE_START, ctx)
        assert enemy[0].health == 0

    def test_mosquito_level_three_hits_three(self, friend, team_of, dice):
        own = Team.of(friend(Species.MOSQUITO, exp=6))
        enemy = team_of(Species.FISH, Species.PIG, Species.HORSE, Species.DUCK)
        ctx = AbilityContext(team=own, slot=0, friend=own[0], dice=dice, enemy=enemy)
        execute_ability(TriggerHook.ON_BATTLE_START, ctx)
        damaged = [f for f in enemy.friends() if not f.has_default_power()]
        assert len(damaged) == 3


class TestBattleRandomness:
    """is_randomized_in_battle."""

    @pytest.mark.parametrize("species,expected", [
        (Species.ANT, True),
        (Species.MOSQUITO, True),
        (Species.CRICKET, False),
        (Species.OTTER, False),
        (Species.BEAVER, False),
        (Species.FISH, False),
    ])
    def test_species(self, species, expected):
        assert is_randomized_in_battle(Friend.new(species)) == expected

    def test_honey_stays_deterministic(self, honey_fish):
        assert not is_randomized_in_battle(honey_fish)
