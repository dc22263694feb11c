"""Candidate rank assignment for a position.

The candidate is not final: conflicts.ensure_unique_rank() runs next and
may shift neighbours, rebalance the scope, or reject the move.
"""

from rankline.contracts import Position, PositionKind
from rankline.core.ranking.arithmetic import MAX_RANK, MIN_RANK, rank_between
from rankline.core.ranking.context import RankContext
from rankline.core.ranking.neighbours import neighbours_at_position


def candidate_rank(ctx: RankContext, position: Position) -> int:
    """Compute the candidate rank for position.

    UNSET appends (LAST); LAST in an empty scope falls back to MIDDLE.
    """
    match position.kind:
        case PositionKind.UNSET:
            return candidate_rank(ctx, Position.last())
        case PositionKind.LAST:
            if not ctx.has_last:
                return candidate_rank(ctx, Position.middle())
            return rank_between(MAX_RANK, ctx.current_last)
        case PositionKind.MIDDLE:
            return rank_between(MAX_RANK, MIN_RANK)
        case PositionKind.AT:
            assert position.index is not None  # guaranteed by Position.__post_init__
            rank_before, rank_after = neighbours_at_position(ctx, position.index)
            return rank_between(rank_after, rank_before)
