"""
Pairwise battle scoring and win-rate analysis.

Every team fights every team (including itself) as team A. Battles with no
random ability are run once; others are sampled ``trials`` times with
RandomDice, or enumerated path by path with DeterministicDice when
``exhaustive_battles`` is set.

The score table is a numpy array of shape (n, n, 3) holding the fractions
(wins, losses, ties) of row team i against column team j.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..combat_engine import Battle, Winner
from ..state.dice import DeterministicDice, Dice, RandomDice
from ..state.team import Team
from .config import SearchConfig

logger = logging.getLogger(__name__)

WINS, LOSSES, TIES = 0, 1, 2


@dataclass
class Record:
    """Outcome fractions of one pairing."""
    wins: float = 0.0
    losses: float = 0.0
    ties: float = 0.0
    battles: int = 0

    @classmethod
    def from_counts(cls, wins: int, losses: int, ties: int) -> Record:
        total = wins + losses + ties
        if total == 0:
            return cls()
        return cls(wins=wins / total, losses=losses / total, ties=ties / total, battles=total)

    def as_array(self) -> np.ndarray:
        return np.array([self.wins, self.losses, self.ties], dtype=np.float64)


def _tally(winner: Winner, counts: List[int]) -> None:
    if winner == Winner.TEAM_A:
        counts[WINS] += 1
    elif winner == Winner.TEAM_B:
        counts[LOSSES] += 1
    else:
        counts[TIES] += 1


def score_pair(a: Team, b: Team, config: Optional[SearchConfig] = None,
               dice: Optional[Dice] = None) -> Record:
    """
    Score team ``a`` against team ``b``.

    Args:
        a: Attacking team (its battle-start abilities fire first)
        b: Defending team
        config: Trial count and enumeration mode
        dice: Random source for sampled battles; a fresh RandomDice seeded
            from ``config.seed`` if omitted
    """
    config = config or SearchConfig()
    counts = [0, 0, 0]

    if Battle(a, b).is_deterministic():
        _tally(Battle(a, b).run(DeterministicDice()), counts)
    elif config.exhaustive_battles:
        enumerator = DeterministicDice()
        while enumerator.advance():
            _tally(Battle(a, b).run(enumerator), counts)
    else:
        dice = dice or RandomDice(config.seed)
        for _ in range(config.trials):
            _tally(Battle(a, b).run(dice), counts)

    return Record.from_counts(*counts)


def score_row(i: int, teams: Sequence[Team], config: SearchConfig) -> np.ndarray:
    """Scores of team ``i`` against every team, shape (n, 3)."""
    seed = None if config.seed is None else config.seed + i
    dice = RandomDice(seed)
    row = np.zeros((len(teams), 3), dtype=np.float64)
    for j, b in enumerate(teams):
        row[j] = score_pair(teams[i], b, config, dice).as_array()
    return row


def score_teams(teams: Sequence[Team], config: Optional[SearchConfig] = None) -> np.ndarray:
    """Score every ordered pairing, returning an (n, n, 3) array."""
    config = config or SearchConfig()
    n = len(teams)
    results = np.zeros((n, n, 3), dtype=np.float64)

    if config.workers > 1 and n > 1:
        logger.info("Scoring %d teams with %d workers", n, config.workers)
        with ProcessPoolExecutor(max_workers=config.workers) as executor:
            futures = {executor.submit(score_row, i, teams, config): i for i in range(n)}
            done = 0
            for future in as_completed(futures):
                results[futures[future]] = future.result()
                done += 1
                if done % config.report_interval == 0:
                    logger.info("  Scored %d/%d teams", done, n)
    else:
        logger.info("Scoring %d teams", n)
        for i in range(n):
            results[i] = score_row(i, teams, config)
            logger.debug(
                "Team %d wins %.1f%% and draws %.1f%%:\n%s",
                i, results[i, :, WINS].mean() * 100, results[i, :, TIES].mean() * 100, teams[i],
            )
            if (i + 1) % config.report_interval == 0:
                logger.info("  Scored %d/%d teams", i + 1, n)

    return results


# =============================================================================
# Analysis
# =============================================================================

def win_rates(scores: np.ndarray) -> np.ndarray:
    """Mean win fraction of each row team across all opponents."""
    if scores.shape[0] == 0:
        return np.zeros(0, dtype=np.float64)
    return scores[:, :, WINS].mean(axis=1)


def friend_weight(team: Team) -> int:
    """Units count one each, and a modifier counts as one more."""
    return sum(1 + (f.modifier is not None) for f in team.friends())


@dataclass
class Analysis:
    """Summary of a score table."""
    ranking: List[Tuple[float, Team]] = field(default_factory=list)  # best first
    best_index: int = -1
    best_rate: float = 0.0
    worst_three: Optional[Tuple[float, Team]] = None

    def top(self, n: int) -> List[Tuple[float, Team]]:
        return self.ranking[:n]


def analyze_scores(teams: Sequence[Team], scores: np.ndarray) -> Analysis:
    """Rank teams by win rate and pick out the best and the worst three-friend team."""
    rates = win_rates(scores)
    if len(rates) == 0:
        return Analysis()

    order = np.argsort(-rates, kind="stable")
    analysis = Analysis(
        ranking=[(float(rates[k]), teams[k]) for k in order],
        best_index=int(order[0]),
        best_rate=float(rates[order[0]]),
    )
    for rate, team in reversed(analysis.ranking):
        if friend_weight(team) == 3:
            analysis.worst_three = (rate, team)
            break
    return analysis


def format_analysis(analysis: Analysis, top: int = 10) -> str:
    lines = []
    for rate, team in analysis.top(top):
        lines.append(f"Win percent: {rate * 100:.2f}%\n{team}\n")
    if analysis.best_index >= 0:
        best = analysis.ranking[0][1]
        lines.append(
            f"The team with the most wins ({analysis.best_rate * 100:.2f}%) "
            f"[{analysis.best_index}]:\n{best}"
        )
    if analysis.worst_three is not None:
        rate, team = analysis.worst_three
        lines.append(f"The worst team with three friends ({rate * 100:.2f}%):\n{team}")
    return "\n".join(lines)
