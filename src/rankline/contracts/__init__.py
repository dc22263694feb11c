"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core.
Settings classes are NOT re-exported here - import them from
rankline.core.config.
"""

from rankline.contracts.enums import (
    LifecycleAction,
    MoveErrorKind,
    PositionKind,
    RankComparison,
    ShiftDirection,
    SortOrder,
)
from rankline.contracts.errors import InvalidMoveError, RecordNotFoundError
from rankline.contracts.position import Position
from rankline.contracts.protocols import PreWriteHook, RankStore
from rankline.contracts.records import PendingWrite, RankedRow, RankPredicate

__all__ = [
    "InvalidMoveError",
    "LifecycleAction",
    "MoveErrorKind",
    "PendingWrite",
    "Position",
    "PositionKind",
    "PreWriteHook",
    "RankComparison",
    "RankPredicate",
    "RankStore",
    "RankedRow",
    "RecordNotFoundError",
    "ShiftDirection",
    "SortOrder",
]
