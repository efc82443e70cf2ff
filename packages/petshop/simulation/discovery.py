"""
Team discovery - every team reachable in one shop turn.

Shops are explored in rounds. Each round runs every possible single action
on every active shop (via DeterministicDice); outcomes that didn't end their
branch become the next round's active shops. A shop that was already seen
with at least as much gold can't lead anywhere new and is skipped, which
makes the search reach a fixed point.

All accumulated state (seen teams, seen shops) lives in the returned
DiscoveryResult rather than at module level, so separate runs never share it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..handlers.shop_handler import ShopState, enumerate_shop_outcomes
from ..state.dice import DeterministicDice
from ..state.team import Team
from .config import SearchConfig

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Everything found by a discovery run."""
    teams: Dict[tuple, Team] = field(default_factory=dict)  # key -> team without exp
    seen_shops: Dict[tuple, int] = field(default_factory=dict)  # shop key without gold -> gold
    rounds: int = 0
    exhausted: bool = False  # True if the search reached a fixed point

    def sorted_teams(self, include_dumb: bool = True) -> List[Team]:
        teams = [t for t in self.teams.values() if include_dumb or not t.is_dumb()]
        teams.sort(key=Team.key)
        return teams


def initial_shops() -> List[ShopState]:
    """Every distinct fresh shop."""
    shops: Dict[tuple, ShopState] = {}
    dice = DeterministicDice()
    while dice.advance():
        shop = ShopState.new(dice)
        shops.setdefault(shop.key(), shop)
    logger.info("Got %d initial shops", len(shops))
    return list(shops.values())


def discover_teams(
    shops: Optional[Iterable[ShopState]] = None,
    max_rounds: Optional[int] = None,
    result: Optional[DiscoveryResult] = None,
) -> DiscoveryResult:
    """
    Explore shops until no new shop states appear (or ``max_rounds`` is hit).

    Args:
        shops: Starting shops; defaults to every fresh shop
        max_rounds: Optional cap on exploration rounds
        result: Existing result to keep accumulating into

    Returns:
        DiscoveryResult with every team seen, keyed without exp
    """
    if shops is None:
        shops = initial_shops()
    if result is None:
        result = DiscoveryResult()

    active: Dict[tuple, ShopState] = {s.key(): s for s in shops}

    while active:
        if max_rounds is not None and result.rounds >= max_rounds:
            logger.info("Stopping after %d rounds", result.rounds)
            return result
        result.rounds += 1
        num_shops = len(active)
        logger.info(
            "Round %d: %d active shops, %d teams, %d seen shops",
            result.rounds, num_shops, len(result.teams), len(result.seen_shops),
        )

        next_shops: Dict[tuple, ShopState] = {}
        for i, shop in enumerate(active.values()):
            logger.debug("Running on shop %d / %d", i + 1, num_shops)
            _explore_shop(shop, result, next_shops)
        active = next_shops

    result.exhausted = True
    return result


def _explore_shop(shop: ShopState, result: DiscoveryResult,
                  next_shops: Dict[tuple, ShopState]) -> None:
    # If this shop was already seen with more gold, this branch isn't going
    # to generate anything worthwhile.
    base = shop.without_gold_key()
    prev_gold = result.seen_shops.get(base)
    if prev_gold is not None and prev_gold >= shop.gold:
        logger.debug("Duplicate shop; skipping")
        return
    result.seen_shops[base] = shop.gold

    dice = DeterministicDice()
    while dice.advance():
        outcome = enumerate_shop_outcomes(shop, dice)
        # Cheap check before building every permutation
        if outcome.shop.key() in next_shops:
            continue

        # Store every compact ordering of the team, so later rounds don't
        # have to rediscover positional variants.
        for team in outcome.team.compact_permutations():
            canonical = team.without_exp()
            key = canonical.key()
            if key not in result.teams:
                result.teams[key] = canonical
                logger.debug(
                    "New %steam (%d):\n%s",
                    "(dumb) " if canonical.is_dumb() else "", len(result.teams), canonical,
                )
            if not outcome.done:
                branch = outcome.shop.copy()
                branch.team = team
                next_shops[branch.key()] = branch


def generate_teams(config: Optional[SearchConfig] = None) -> List[Team]:
    """Discover teams from every fresh shop and return the ones worth scoring."""
    config = config or SearchConfig()
    result = discover_teams(max_rounds=config.max_rounds)
    teams = result.sorted_teams(include_dumb=config.include_dumb)
    logger.info(
        "Got %d teams (%d total incl. dumb) after %d rounds",
        len(teams), len(result.teams), result.rounds,
    )
    return teams
