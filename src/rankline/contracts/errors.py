"""Exceptions raised by the ranking engine.

Storage failures are NOT represented here: SQLAlchemy errors propagate
unchanged so the enclosing transaction rolls back every partial write.
"""

from rankline.contracts.enums import MoveErrorKind

_MOVE_MESSAGES: dict[MoveErrorKind, str] = {
    MoveErrorKind.TOO_LARGE: "too large",
    MoveErrorKind.TOO_SMALL: "too small",
}


class InvalidMoveError(Exception):
    """Raised when a record cannot be placed inside [MIN_RANK, MAX_RANK].

    Raised only after shifting and rebalancing have been considered, so it
    signals an exhausted rank range rather than an ordinary collision.

    Attributes:
        kind: Which end of the range was exceeded
        rank: Offending rank, when one was computed
    """

    def __init__(self, kind: MoveErrorKind, *, rank: int | None = None) -> None:
        self.kind = kind
        self.rank = rank
        super().__init__(_MOVE_MESSAGES[kind])


class RecordNotFoundError(LookupError):
    """Raised when an update or delete targets a row that does not exist."""

    def __init__(self, table: str, identity: object) -> None:
        self.table = table
        self.identity = identity
        super().__init__(f"No row in '{table}' with identity {identity!r}")
