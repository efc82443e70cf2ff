"""
Shop phase tests.

Tests cover:
- Offer generation and rerolls
- Buying into empty slots and combining with a match
- Buying food, selling, merging
- step() preconditions ending a branch
- Exhaustive outcome enumeration from one shop
"""

import pytest

from packages.petshop.content import Food, Modifier, Species
from packages.petshop.handlers.shop_handler import (
    ShopAction,
    ShopState,
    enumerate_shop_outcomes,
    run_random_turn,
)
from packages.petshop.params import FRIEND_COST, STARTING_GOLD, TEAM_SIZE
from packages.petshop.state.dice import DeterministicDice, RandomDice
from packages.petshop.state.friend import Friend
from packages.petshop.state.team import Team


class TestShopGeneration:
    """Fresh shops and rerolls."""

    def test_new_shop_first_path(self, dice):
        shop = ShopState.new(dice)
        assert shop.gold == STARTING_GOLD
        assert shop.team.is_empty()
        assert [f.species for f in shop.friends] == [Species.ANT] * 3
        assert shop.foods == [Food.APPLE]

    def test_every_initial_shop_enumerated(self, enumerate_paths):
        keys = enumerate_paths(lambda d: ShopState.new(d).key())
        assert len(keys) == 9 ** 3 * 2
        assert len(set(keys)) == len(keys)

    def test_offers_are_purchasable(self, seeded_dice):
        for _ in range(50):
            shop = ShopState.new(seeded_dice)
            assert all(f.species.purchasable for f in shop.friends)

    def test_reroll_does_not_charge(self, shop_with, seeded_dice):
        shop = shop_with(gold=4)
        shop.reroll(seeded_dice)
        assert shop.gold == 4

    def test_copy_is_independent(self, shop_with, team_of):
        shop = shop_with(team=team_of(Species.FISH))
        clone = shop.copy()
        clone.gold -= 1
        clone.team[0].health = 9
        clone.friends[0].attack = 9
        assert shop.gold == STARTING_GOLD
        assert shop.team[0].health == 2
        assert shop.friends[0].attack == 1

    def test_key_separates_gold(self, shop_with):
        a = shop_with(gold=10)
        b = shop_with(gold=9)
        assert a.key() != b.key()
        assert a.without_gold_key() == b.without_gold_key()


class TestBuyFriend:
    """Buying units."""

    def test_buy_into_empty_slot(self, shop_with, dice):
        shop = shop_with()
        shop.buy_friend(1, 2, dice)
        assert shop.gold == STARTING_GOLD - FRIEND_COST
        assert shop.friends[1] is None
        assert shop.team[2].species == Species.BEAVER

    def test_otter_buffs_existing_friend(self, shop_with, team_of, dice):
        shop = shop_with(offers=(Species.OTTER, None, None), team=team_of(Species.FISH))
        shop.buy_friend(0, 1, dice)
        fish, otter = shop.team[0], shop.team[1]
        assert (fish.health, fish.attack) == (3, 4)
        assert otter.species == Species.OTTER
        assert otter.has_default_power()

    def test_otter_alone_buffs_nobody(self, shop_with, dice):
        shop = shop_with(offers=(Species.OTTER, None, None))
        shop.buy_friend(0, 0, dice)
        assert shop.team[0].has_default_power()
        assert dice.depth == 0

    def test_horse_buffs_bought_friend(self, shop_with, team_of, dice):
        shop = shop_with(team=team_of(Species.HORSE))
        shop.buy_friend(0, 1, dice)
        ant = shop.team[1]
        assert (ant.health, ant.attack) == (3, 2)

    def test_combine_on_buy(self, shop_with, team_of, dice):
        shop = shop_with(team=team_of(Species.ANT))
        shop.buy_friend(0, 0, dice)
        ant = shop.team[0]
        assert (ant.health, ant.attack, ant.exp) == (3, 2, 1)
        assert shop.team.count() == 1

    def test_combined_otter_fires_after_combining(self, shop_with, team_of, dice):
        shop = shop_with(
            offers=(Species.OTTER, None, None),
            team=team_of(Species.OTTER, Species.FISH),
        )
        shop.buy_friend(0, 0, dice)
        otter, fish = shop.team[0], shop.team[1]
        assert (otter.health, otter.attack, otter.exp) == (2, 3, 1)
        assert (fish.health, fish.attack) == (3, 4)

    def test_not_enough_gold(self, shop_with, dice):
        shop = shop_with(gold=FRIEND_COST - 1)
        with pytest.raises(ValueError):
            shop.buy_friend(0, 0, dice)

    def test_empty_offer(self, shop_with, dice):
        shop = shop_with(offers=(None, Species.ANT, None))
        with pytest.raises(ValueError):
            shop.buy_friend(0, 0, dice)


class TestCombine:
    """Folding a same-species unit in."""

    def test_stats_take_max_plus_one(self, shop_with, friend):
        shop = shop_with(team=Team.of(friend(Species.ANT, health=5, attack=1)))
        shop.combine_friends(0, friend(Species.ANT, health=2, attack=4))
        ant = shop.team[0]
        assert (ant.health, ant.attack, ant.exp) == (6, 5, 1)

    def test_species_mismatch(self, shop_with, team_of):
        shop = shop_with(team=team_of(Species.ANT))
        with pytest.raises(ValueError):
            shop.combine_friends(0, Friend.new(Species.FISH))

    def test_empty_target(self, shop_with):
        shop = shop_with()
        with pytest.raises(ValueError):
            shop.combine_friends(0, Friend.new(Species.ANT))


class TestBuyFood:
    """Feeding units."""

    def test_apple(self, shop_with, team_of, dice):
        shop = shop_with(team=team_of(Species.FISH))
        shop.buy_food(0, 0, dice)
        fish = shop.team[0]
        assert (fish.health, fish.attack) == (3, 4)
        assert shop.foods == [None]
        assert shop.gold == STARTING_GOLD - 3

    def test_honey(self, shop_with, team_of, dice):
        shop = shop_with(foods=(Food.HONEY,), team=team_of(Species.FISH))
        shop.buy_food(0, 0, dice)
        assert shop.team[0].modifier == Modifier.HONEY
        assert shop.team[0].has_default_power()

    def test_no_target(self, shop_with, dice):
        with pytest.raises(ValueError):
            shop_with().buy_food(0, 0, dice)


class TestSell:
    """Selling units and on-sell abilities."""

    def test_sell_refunds_level(self, shop_with, team_of, dice):
        shop = shop_with(team=team_of(Species.FISH, Species.ANT))
        shop.sell_friend(0, dice)
        assert shop.gold == STARTING_GOLD + 1
        assert shop.team[0] is None
        assert shop.team[1].species == Species.ANT

    def test_pig_gives_gold(self, shop_with, team_of, dice):
        shop = shop_with(team=team_of(Species.PIG))
        shop.sell_friend(0, dice)
        assert shop.gold == STARTING_GOLD + 2

    def test_duck_buffs_shop(self, shop_with, team_of, dice):
        shop = shop_with(team=team_of(Species.DUCK))
        shop.sell_friend(0, dice)
        assert [f.health for f in shop.friends] == [3, 3, 2]

    def test_beaver_buffs_two_friends(self, shop_with, team_of, dice):
        shop = shop_with(team=team_of(Species.BEAVER, Species.ANT, Species.FISH))
        shop.sell_friend(0, dice)
        assert shop.team[1].health == 3
        assert shop.team[2].health == 3
        assert shop.team[1].attack == 1

    def test_beaver_choices_enumerated(self, shop_with, team_of, enumerate_paths):
        team = team_of(Species.BEAVER, Species.ANT, Species.FISH, Species.PIG)

        def sell(d):
            shop = shop_with(team=team.copy())
            shop.sell_friend(0, d)
            return tuple(f.health for f in shop.team.friends())

        outcomes = enumerate_paths(sell)
        # Ordered picks of 2 among 3
        assert len(outcomes) == 6
        assert set(outcomes) == {(3, 3, 3), (3, 2, 4), (2, 3, 4)}


class TestMerge:
    """Merging two units already on the team."""

    def test_candidates(self, shop_with, team_of):
        shop = shop_with(team=team_of(Species.ANT, Species.FISH, Species.ANT))
        assert shop.merge_candidates() == [[2], [], [0], [], []]

    def test_merge_step(self, shop_with, team_of):
        shop = shop_with(team=team_of(Species.ANT, Species.FISH, Species.ANT))
        done = shop.step(DeterministicDice.from_key("4"))
        assert not done
        assert shop.team.count() == 2
        fish, ant = shop.team[0], shop.team[1]
        assert fish.species == Species.FISH
        assert (ant.health, ant.attack, ant.exp) == (3, 2, 1)
        assert shop.gold == STARTING_GOLD

    def test_merge_without_pairs_ends_branch(self, shop_with, team_of):
        shop = shop_with(team=team_of(Species.ANT, Species.FISH))
        dice = DeterministicDice.from_key("4")
        assert shop.step(dice)
        assert dice.depth == 1


class TestStep:
    """Single random actions."""

    @pytest.mark.parametrize("action", [ShopAction.BUY_FRIEND, ShopAction.BUY_FOOD, ShopAction.REROLL])
    def test_no_gold_ends_branch(self, shop_with, team_of, action):
        shop = shop_with(gold=0, team=team_of(Species.FISH))
        before = shop.key()
        assert shop.step(DeterministicDice.from_key(str(action.value)))
        assert shop.key() == before

    def test_sell_empty_team_ends_branch(self, shop_with):
        shop = shop_with()
        assert shop.step(DeterministicDice.from_key("2"))

    def test_buy_with_full_incompatible_team_ends_branch(self, shop_with, team_of):
        shop = shop_with(team=team_of(*([Species.FISH] * TEAM_SIZE)))
        assert shop.step(DeterministicDice.from_key("0"))

    def test_reroll_charges_one(self, shop_with):
        shop = shop_with(gold=5)
        assert not shop.step(DeterministicDice.from_key("3"))
        assert shop.gold == 4

    def test_team_compact_after_every_action(self, seeded_dice):
        shop = ShopState.new(seeded_dice)
        for _ in range(100):
            if shop.step(seeded_dice):
                break
            members = shop.team.count()
            assert all(f is not None for f in shop.team.slots[:members])
            assert all(f is None for f in shop.team.slots[members:])
            assert shop.gold >= 0


class TestEnumerateOutcomes:
    """One exhaustive step from a fixed shop."""

    def test_outcome_counts(self, shop_with):
        shop = shop_with()
        dice = DeterministicDice()
        outcomes = []
        while dice.advance():
            outcomes.append(enumerate_shop_outcomes(shop, dice))

        # 15 buys (3 offers x 5 slots), 1458 rerolls, 3 failed actions
        assert len(outcomes) == 15 + 9 ** 3 * 2 + 3
        assert sum(1 for o in outcomes if o.done) == 3

    def test_source_shop_untouched(self, shop_with):
        shop = shop_with()
        before = shop.key()
        dice = DeterministicDice()
        while dice.advance():
            enumerate_shop_outcomes(shop, dice)
        assert shop.key() == before

    def test_outcome_team_matches_shop(self, shop_with, dice):
        outcome = enumerate_shop_outcomes(shop_with(), dice)
        assert outcome.team is outcome.shop.team
        assert outcome.team[0].species == Species.ANT


class TestRandomTurn:
    """Playing a whole turn with random choices."""

    def test_reproducible(self):
        a, steps_a = run_random_turn(ShopState.new(RandomDice(3)), RandomDice(4))
        b, steps_b = run_random_turn(ShopState.new(RandomDice(3)), RandomDice(4))
        assert a.key() == b.key()
        assert steps_a == steps_b

    def test_step_cap(self, shop_with, seeded_dice):
        _, steps = run_random_turn(shop_with(), seeded_dice, max_steps=0)
        assert steps == 0
