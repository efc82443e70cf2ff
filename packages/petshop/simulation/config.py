"""
Configuration for team discovery and scoring runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class SearchConfig:
    """Options for a full discover-then-score run."""

    # Caching
    teams_file: str = "teams.pkl.gz"
    scores_file: str = "scores.pkl.gz"
    use_cache: bool = True

    # Discovery
    max_rounds: Optional[int] = None  # None runs to a fixed point
    include_dumb: bool = False  # Keep teams that are obviously underbuilt

    # Scoring
    trials: int = 100  # Random trials per pairing with random abilities
    exhaustive_battles: bool = False  # Enumerate every battle path instead
    seed: Optional[int] = None
    workers: int = 1  # >1 scores rows in worker processes

    # Reporting
    report_top: int = 10
    report_interval: int = 50  # Log scoring progress every N rows
