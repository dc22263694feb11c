"""Rank assignment and rebalancing.

Primary API:
    RankEngine - lifecycle entry points (before_insert/update/delete)

Building blocks:
    rank_between, rank_for_row - rank arithmetic
    RankContext - per-operation extremes cache
    neighbours_at_position - ranks bracketing a position
    candidate_rank - rank for a position before conflict handling
    ensure_unique_rank, shift_ranks, rebalance_ranks - conflict handling
"""

from rankline.core.ranking.arithmetic import (
    MAX_RANK,
    MIN_RANK,
    rank_between,
    rank_for_row,
    rebalance_spacing,
    round_div,
)
from rankline.core.ranking.assignment import candidate_rank
from rankline.core.ranking.conflicts import (
    ensure_unique_rank,
    has_conflict,
    placement_index,
    rebalance_fits,
    rebalance_ranks,
    shift_ranks,
)
from rankline.core.ranking.context import RankContext
from rankline.core.ranking.engine import RankEngine
from rankline.core.ranking.neighbours import neighbours_at_position

__all__ = [
    "MAX_RANK",
    "MIN_RANK",
    "RankContext",
    "RankEngine",
    "candidate_rank",
    "ensure_unique_rank",
    "has_conflict",
    "neighbours_at_position",
    "placement_index",
    "rank_between",
    "rank_for_row",
    "rebalance_fits",
    "rebalance_ranks",
    "rebalance_spacing",
    "round_div",
    "shift_ranks",
]
