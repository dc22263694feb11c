"""Conflict detection and resolution for candidate ranks.

A candidate conflicts when it lies above MAX_RANK or another record in
scope already holds it. Resolution prefers the cheapest fix:

1. Shift down - candidate is MAX_RANK and the bottom of the range has room
2. Shift up - candidate is below the current last and the top has room
3. Rebalance - redistribute every rank in scope evenly

Rows are written through the store inside the caller's transaction. If
anything later fails, the transaction rollback undoes every shift.
"""

from collections.abc import Sequence

from rankline.contracts import (
    InvalidMoveError,
    MoveErrorKind,
    Position,
    PositionKind,
    RankComparison,
    RankedRow,
    RankPredicate,
    ShiftDirection,
    SortOrder,
)
from rankline.core.logging import get_logger
from rankline.core.ranking.arithmetic import MAX_RANK, MIN_RANK, rank_for_row, rebalance_spacing
from rankline.core.ranking.context import RankContext

slog = get_logger(__name__)


def has_conflict(ctx: RankContext) -> bool:
    rank = ctx.rank
    if rank > MAX_RANK:
        return True
    return ctx.store.query_exact(ctx.scope, rank, exclude=ctx.identity) is not None


def ensure_unique_rank(ctx: RankContext, position: Position) -> ShiftDirection:
    """Make the candidate rank in ctx final.

    Returns:
        How the conflict (if any) was resolved

    Raises:
        InvalidMoveError: If the final rank still falls outside the range
    """
    direction = shift_ranks(ctx, position) if has_conflict(ctx) else ShiftDirection.NONE
    _check_bounds(ctx)
    return direction


def shift_ranks(ctx: RankContext, position: Position) -> ShiftDirection:
    """Open a slot at the candidate rank, or rebalance when no band has room."""
    rank = ctx.rank
    first = ctx.current_first
    last = ctx.current_last

    if first is not None and first > MIN_RANK and rank == MAX_RANK:
        # The row holding MAX_RANK stays after the placed record: take the slot below it
        target = rank - 1 if ctx.follower_rank == rank else rank
        moved = ctx.store.bulk_increment(
            ctx.scope,
            RankPredicate(RankComparison.AT_MOST, target),
            -1,
            exclude=ctx.identity,
        )
        ctx.put_rank(target)
        slog.debug("rank_shifted", direction=ShiftDirection.DOWN, rank=target, rows=moved, scope=ctx.scope)
        return ShiftDirection.DOWN

    if last < MAX_RANK - 1 and rank < last:
        moved = ctx.store.bulk_increment(
            ctx.scope,
            RankPredicate(RankComparison.AT_LEAST, rank),
            1,
            exclude=ctx.identity,
        )
        slog.debug("rank_shifted", direction=ShiftDirection.UP, rank=rank, rows=moved, scope=ctx.scope)
        return ShiftDirection.UP

    rebalance_ranks(ctx, position)
    return ShiftDirection.REBALANCE


def rebalance_ranks(ctx: RankContext, position: Position) -> None:
    """Spread every rank in scope evenly across the range.

    Rows before the placed record keep their index, rows after it move up
    one slot, and the placed record takes the freed slot.

    Raises:
        InvalidMoveError: If the scope holds more rows than the range can space out
    """
    rows = ctx.store.query_ordered(ctx.scope, SortOrder.ASC, exclude=ctx.identity)
    count = len(rows) + 1
    if not rebalance_fits(count):
        slog.warning("invalid_move", kind=MoveErrorKind.TOO_LARGE, rows=count, scope=ctx.scope)
        raise InvalidMoveError(MoveErrorKind.TOO_LARGE)

    index = placement_index(position, rows, ctx.rank)
    attempted = rows[index].rank if index < len(rows) else MAX_RANK + 1
    ctx.store.write_many((row.identity, rank_for_row(row.rank, i, count, attempted)) for i, row in enumerate(rows))
    ctx.put_rank(rank_for_row(0, index, count, 1))
    slog.info("rank_rebalanced", rows=count, scope=ctx.scope)


def rebalance_fits(count: int) -> bool:
    """Whether count rows get distinct evenly spaced ranks inside the range."""
    return rebalance_spacing(count) >= 1


def placement_index(position: Position, rows: Sequence[RankedRow], attempted_rank: int) -> int:
    """Zero-based slot of the placed record among the other rows in scope.

    An explicit index counts the rows that precede the record. LAST and
    UNSET go after every row. MIDDLE goes after the rows ranked below the
    attempted rank.
    """
    match position.kind:
        case PositionKind.AT:
            assert position.index is not None  # guaranteed by Position.__post_init__
            return min(max(position.index, 0), len(rows))
        case PositionKind.LAST | PositionKind.UNSET:
            return len(rows)
        case PositionKind.MIDDLE:
            return sum(1 for row in rows if row.rank < attempted_rank)


def _check_bounds(ctx: RankContext) -> None:
    rank = ctx.rank
    if rank > MAX_RANK:
        kind = MoveErrorKind.TOO_LARGE
    elif rank < MIN_RANK:
        kind = MoveErrorKind.TOO_SMALL
    else:
        return
    slog.warning("invalid_move", kind=kind, rank=rank, scope=ctx.scope)
    raise InvalidMoveError(kind, rank=rank)
