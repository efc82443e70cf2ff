"""
Search and scoring over the core engine.

Provides:
1. Team discovery to a fixed point over every shop decision
2. Pairwise battle scoring (optionally across worker processes)
3. Compressed on-disk caching of teams and score tables

Usage:
    from packages.petshop.simulation import SearchConfig, generate_teams, score_teams

    config = SearchConfig(trials=200, workers=8)
    teams = generate_teams(config)
    scores = score_teams(teams, config)
"""

from .config import SearchConfig
from .cache import write_compressed, read_compressed
from .discovery import DiscoveryResult, initial_shops, discover_teams, generate_teams
from .scoring import (
    Record,
    Analysis,
    score_pair,
    score_row,
    score_teams,
    win_rates,
    analyze_scores,
    format_analysis,
)

__all__ = [
    "SearchConfig",
    "write_compressed",
    "read_compressed",
    "DiscoveryResult",
    "initial_shops",
    "discover_teams",
    "generate_teams",
    "Record",
    "Analysis",
    "score_pair",
    "score_row",
    "score_teams",
    "win_rates",
    "analyze_scores",
    "format_analysis",
]
