"""Per-operation state for one rank resolution.

A RankContext lives for exactly one insert or update. It carries the
store and pending write through the call chain and caches the scope's
extreme ranks so conflict handling never queries them twice.
"""

from dataclasses import dataclass, field
from typing import Any

from rankline.contracts import PendingWrite, RankStore, SortOrder
from rankline.core.ranking.arithmetic import MIN_RANK

_UNRESOLVED: Any = object()


@dataclass
class RankContext:
    """Mutable context for one rank resolution.

    Extremes exclude the record being placed. current_first stays None for
    an empty scope; current_last falls back to MIN_RANK.

    follower_rank is set by neighbour resolution when the upper bound of
    the bracket is a real row, i.e. the row that must stay AFTER the placed
    record.
    """

    store: RankStore
    pending: PendingWrite
    rank_field: str
    scope_field: str | None = None
    follower_rank: int | None = field(default=None, init=False)
    _first: Any = field(default=_UNRESOLVED, init=False, repr=False)
    _last: Any = field(default=_UNRESOLVED, init=False, repr=False)

    @property
    def identity(self) -> Any:
        return self.pending.identity

    @property
    def scope(self) -> Any:
        """Scope value of the record, None when no scope column is configured."""
        if self.scope_field is None:
            return None
        return self.pending.get_field(self.scope_field)

    @property
    def rank(self) -> int:
        return int(self.pending.get_field(self.rank_field))

    def put_rank(self, rank: int) -> None:
        self.pending = self.pending.with_changes(**{self.rank_field: rank})

    @property
    def current_first(self) -> int | None:
        if self._first is _UNRESOLVED:
            self._first = self.store.query_extreme(self.scope, SortOrder.ASC, exclude=self.identity)
        first: int | None = self._first
        return first

    @property
    def has_last(self) -> bool:
        """True when another record in scope holds a rank."""
        return self._resolve_last() is not None

    @property
    def current_last(self) -> int:
        last = self._resolve_last()
        return MIN_RANK if last is None else last

    def _resolve_last(self) -> int | None:
        if self._last is _UNRESOLVED:
            self._last = self.store.query_extreme(self.scope, SortOrder.DESC, exclude=self.identity)
        last: int | None = self._last
        return last
