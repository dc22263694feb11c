"""Neighbour resolution: which ranks bracket a target position."""

from rankline.contracts import SortOrder
from rankline.core.ranking.arithmetic import MAX_RANK, MIN_RANK
from rankline.core.ranking.context import RankContext


def neighbours_at_position(ctx: RankContext, position: int) -> tuple[int, int]:
    """Return (rank_before, rank_after) for a record placed at position.

    position counts the records that should precede the placed one, so
    position <= 0 means "in front of everything". The record itself never
    counts as a neighbour. Records ctx.follower_rank when rank_after
    belongs to an actual row.
    """
    if position <= 0:
        first = ctx.current_first
        if first is None:
            return MIN_RANK, MAX_RANK
        ctx.follower_rank = first
        return MIN_RANK, first

    rows = ctx.store.query_ordered(
        ctx.scope,
        SortOrder.ASC,
        limit=2,
        offset=position - 1,
        exclude=ctx.identity,
    )
    if not rows:
        return ctx.current_last, MAX_RANK
    if len(rows) == 1:
        return rows[0].rank, MAX_RANK
    ctx.follower_rank = rows[1].rank
    return rows[0].rank, rows[1].rank
