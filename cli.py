#!/usr/bin/env python3
"""
Pet Shop Solver - Command Line Interface

Finds every team reachable in the first shop turn, battles them all against
each other, and reports which teams win most often.

Usage:
    uv run python cli.py run --trials 200 --workers 8
    uv run python cli.py teams --limit 20
    uv run python cli.py shop --seed 42
    uv run python cli.py battle --seed 42
    uv run python cli.py replay 0210
"""

import argparse
import json
import logging
import os
import sys

# Add repository root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from packages.petshop.combat_engine import Battle
from packages.petshop.handlers.shop_handler import ShopState, run_random_turn
from packages.petshop.state.dice import DeterministicDice, RandomDice
from packages.petshop.simulation import (
    SearchConfig,
    analyze_scores,
    discover_teams,
    format_analysis,
    generate_teams,
    read_compressed,
    score_teams,
    write_compressed,
)

logger = logging.getLogger("petshop")


# =============================================================================
# SETUP
# =============================================================================

def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def config_from_args(args) -> SearchConfig:
    return SearchConfig(
        teams_file=args.teams_file,
        scores_file=args.scores_file,
        use_cache=not args.no_cache,
        max_rounds=args.max_rounds,
        include_dumb=args.include_dumb,
        trials=args.trials,
        exhaustive_battles=args.exhaustive,
        seed=args.seed,
        workers=args.workers,
        report_top=args.top,
    )


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_run(args) -> int:
    """Discover teams, score every pairing and print the analysis."""
    config = config_from_args(args)

    teams = read_compressed(config.teams_file) if config.use_cache else None
    if teams is not None:
        logger.info("Loading teams from cache")
    else:
        logger.info("Generating teams")
        teams = generate_teams(config)
        if config.use_cache:
            write_compressed(teams, config.teams_file)

    scores = read_compressed(config.scores_file) if config.use_cache else None
    if scores is not None and scores.shape[0] == len(teams):
        logger.info("Loading scores from cache")
    else:
        logger.info("Scoring teams")
        scores = score_teams(teams, config)
        if config.use_cache:
            write_compressed(scores, config.scores_file)

    logger.info("Analyzing scores")
    print(format_analysis(analyze_scores(teams, scores), top=config.report_top))
    return 0


def cmd_teams(args) -> int:
    """Discover teams and print them."""
    config = config_from_args(args)
    result = discover_teams(max_rounds=config.max_rounds)
    teams = result.sorted_teams(include_dumb=config.include_dumb)

    if args.json:
        print(json.dumps({
            "rounds": result.rounds,
            "exhausted": result.exhausted,
            "count": len(teams),
            "teams": [[list(slot) for slot in t.key()] for t in teams[:args.limit]],
        }, indent=2))
        return 0

    print(f"Found {len(teams)} teams in {result.rounds} rounds "
          f"({'fixed point' if result.exhausted else 'stopped early'})")
    for i, team in enumerate(teams[:args.limit]):
        print(f"\nTeam {i}:\n{team}")
    return 0


def cmd_shop(args) -> int:
    """Play one random shop turn and print the result."""
    dice = RandomDice(args.seed)
    shop = ShopState.new(dice)
    print(f"Initial shop:\n{shop}\n")
    shop, steps = run_random_turn(shop, dice)
    print(f"After {steps} actions:\n{shop}")
    return 0


def cmd_battle(args) -> int:
    """Build two random teams and battle them."""
    dice = RandomDice(args.seed)
    shop_a, _ = run_random_turn(ShopState.new(dice), dice)
    shop_b, _ = run_random_turn(ShopState.new(dice), dice)
    battle = Battle(shop_a.team, shop_b.team)
    deterministic = battle.is_deterministic()
    if not args.json:
        print(f"{battle}\n")
    winner = battle.run(dice)

    if args.json:
        print(json.dumps({
            "winner": winner.value,
            "clashes": battle.clashes,
            "deterministic": deterministic,
        }, indent=2))
    else:
        print(f"Winner: {winner.value} after {battle.clashes} clashes")
    return 0


def cmd_replay(args) -> int:
    """Replay one enumerated path through a fresh shop and its first action."""
    dice = DeterministicDice.from_key(args.key)
    shop = ShopState.new(dice)
    print(f"Shop:\n{shop}\n")
    done = shop.step(dice)
    print(f"After one action ({'branch ended' if done else 'continues'}):\n{shop}")
    return 0


# =============================================================================
# MAIN
# =============================================================================

def main():
    parser = argparse.ArgumentParser(
        description="Pet Shop Solver - exhaustive team discovery and ranking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s run --trials 200 --workers 8
  %(prog)s teams --max-rounds 2 --limit 10
  %(prog)s shop --seed 42
  %(prog)s battle --seed 42
  %(prog)s replay 0210
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    # Shared search options
    search = argparse.ArgumentParser(add_help=False)
    search.add_argument("--teams-file", default="teams.pkl.gz", help="Team cache path")
    search.add_argument("--scores-file", default="scores.pkl.gz", help="Score cache path")
    search.add_argument("--no-cache", action="store_true", help="Ignore and don't write caches")
    search.add_argument("--max-rounds", type=int, help="Stop discovery after N rounds")
    search.add_argument("--include-dumb", action="store_true", help="Keep underbuilt teams")
    search.add_argument("--trials", "-t", type=int, default=100, help="Random trials per pairing")
    search.add_argument("--exhaustive", action="store_true",
                        help="Enumerate every battle path instead of sampling")
    search.add_argument("--seed", "-s", type=int, help="Random seed")
    search.add_argument("--workers", "-w", type=int, default=1, help="Scoring processes")
    search.add_argument("--top", type=int, default=10, help="Teams to print")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("run", parents=[search], help="Discover, score and rank teams")

    teams_parser = subparsers.add_parser("teams", parents=[search], help="Discover and print teams")
    teams_parser.add_argument("--limit", "-n", type=int, default=10, help="Teams to print")
    teams_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    shop_parser = subparsers.add_parser("shop", help="Play one random shop turn")
    shop_parser.add_argument("--seed", "-s", type=int, help="Random seed")

    battle_parser = subparsers.add_parser("battle", help="Battle two random teams")
    battle_parser.add_argument("--seed", "-s", type=int, help="Random seed")
    battle_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    replay_parser = subparsers.add_parser("replay", help="Replay a shop path from a dice key")
    replay_parser.add_argument("key", help="Base-36 dice key")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    commands = {
        "run": cmd_run,
        "teams": cmd_teams,
        "shop": cmd_shop,
        "battle": cmd_battle,
        "replay": cmd_replay,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
