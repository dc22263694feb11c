"""Position: the caller's intended ordinal placement.

A tagged variant instead of one overloaded field. Explicit indexes carry
an int, sentinels carry nothing:

    Position.at(3)       # after the first three records in scope
    Position.last()      # after every record in scope
    Position.middle()    # centre of the rank range (first record only)
    Position.unset()     # no preference, treated as LAST

Raw values coming from callers go through Position.coerce().
"""

from dataclasses import dataclass
from typing import Self

from rankline.contracts.enums import PositionKind


@dataclass(frozen=True)
class Position:
    """Intended placement of a record within its scope."""

    kind: PositionKind
    index: int | None = None

    def __post_init__(self) -> None:
        if self.kind == PositionKind.AT:
            # bool is an int subclass - reject it explicitly
            if type(self.index) is not int:
                raise ValueError(f"Position.at requires an int index, got {type(self.index).__name__}")
        elif self.index is not None:
            raise ValueError(f"Position {self.kind} must not carry an index")

    @classmethod
    def at(cls, index: int) -> Self:
        return cls(PositionKind.AT, index)

    @classmethod
    def last(cls) -> Self:
        return cls(PositionKind.LAST)

    @classmethod
    def middle(cls) -> Self:
        return cls(PositionKind.MIDDLE)

    @classmethod
    def unset(cls) -> Self:
        return cls(PositionKind.UNSET)

    @classmethod
    def coerce(cls, value: object) -> Self:
        """Convert a raw caller value into a Position.

        Accepts an existing Position, an int, the strings "last" and
        "middle", or None (unset).

        Raises:
            ValueError: For any other value, including bools
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.unset()
        if type(value) is int:
            return cls.at(value)
        if value == PositionKind.LAST:
            return cls.last()
        if value == PositionKind.MIDDLE:
            return cls.middle()
        raise ValueError(f"Invalid position {value!r}: expected int, 'last', 'middle' or None")

    @property
    def is_index(self) -> bool:
        return self.kind == PositionKind.AT
