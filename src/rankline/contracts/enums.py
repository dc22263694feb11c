"""All status codes, modes, and kinds used across subsystem boundaries."""

from enum import StrEnum


class PositionKind(StrEnum):
    """Tag of a Position value.

    AT carries an explicit zero-or-positive index; the other kinds are
    sentinels resolved against the current contents of the scope.
    """

    AT = "at"
    LAST = "last"
    MIDDLE = "middle"
    UNSET = "unset"


class LifecycleAction(StrEnum):
    """Kind of record mutation the pre-write hook is invoked for."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class SortOrder(StrEnum):
    """Direction of a rank-ordered query."""

    ASC = "asc"
    DESC = "desc"


class RankComparison(StrEnum):
    """Comparison used by bulk shifts to select the band of ranks to move."""

    AT_MOST = "<="
    AT_LEAST = ">="


class ShiftDirection(StrEnum):
    """How a rank conflict was resolved.

    Values:
        NONE: Candidate rank was free, nothing else moved
        DOWN: Other ranks at or below the candidate were decremented
        UP: Other ranks at or above the candidate were incremented
        REBALANCE: Every rank in scope was redistributed
    """

    NONE = "none"
    DOWN = "down"
    UP = "up"
    REBALANCE = "rebalance"


class MoveErrorKind(StrEnum):
    """Reason a move cannot be placed inside the rank range."""

    TOO_LARGE = "too_large"
    TOO_SMALL = "too_small"
