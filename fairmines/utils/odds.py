"""Mines probability and payout model.

The chance of surviving ``r`` picks is the hypergeometric probability of
drawing ``r`` safe tiles without replacement:

    P(r) = prod_{i=0}^{r-1} (total - mines - i) / (total - i)

The multiplier is ``(1 - edge) / P(r)``, floored at 1 so that a safe pick never
pays less than the stake. As P(r) shrinks with every pick the multiplier never
decreases in ``r``.
"""

import math
from typing import List

from fairmines.constants import EDGE_CEILING, TOTAL_TILES


def max_safe_picks(mines: int, total: int = TOTAL_TILES) -> int:
    """Number of safe tiles on the board."""
    return max(0, total - mines)


def probability_safe_picks(r: int, mines: int, total: int = TOTAL_TILES) -> float:
    """
    Probability of revealing ``r`` safe tiles in a row.

    Args:
        r: Number of safe picks
        mines: Mines on the board
        total: Board size

    Returns:
        Probability in [0, 1]; exactly 0 once the safe tiles are exhausted
    """
    if r <= 0:
        return 1.0
    prob = 1.0
    for i in range(r):
        safe_left = (total - mines) - i
        tiles_left = total - i
        if safe_left <= 0:
            return 0.0
        prob *= safe_left / tiles_left
    return prob


def clamp_edge(house_edge_pct: float) -> float:
    """Convert a percent edge into a fraction within [0, 0.99]."""
    return max(0.0, min(EDGE_CEILING, house_edge_pct / 100))


def payout_multiplier(r: int, mines: int, house_edge_pct: float, total: int = TOTAL_TILES) -> float:
    """
    House-adjusted payout multiplier after ``r`` safe picks.

    Where ``(1 - edge) / P(r)`` drops below 1 (a high edge on a board with
    few mines) the result is 1.0 rather than the raw quotient, so a verifier
    recomputing the unfloored formula will see 1.0 on those boards.

    Args:
        r: Number of safe picks
        mines: Mines on the board
        house_edge_pct: House edge in percent
        total: Board size

    Returns:
        Multiplier >= 1, or ``math.inf`` when ``r`` safe picks
        are impossible
    """
    if r <= 0:
        return 1.0
    prob = probability_safe_picks(r, mines, total)
    if prob <= 0:
        return math.inf
    edge = clamp_edge(house_edge_pct)
    return max(1.0, (1 - edge) / prob)


def multiplier_table(mines: int, house_edge_pct: float, total: int = TOTAL_TILES) -> List[float]:
    """Multipliers for every reachable pick count, r = 0 .. total - mines."""
    return [
        payout_multiplier(r, mines, house_edge_pct, total)
        for r in range(max_safe_picks(mines, total) + 1)
    ]
