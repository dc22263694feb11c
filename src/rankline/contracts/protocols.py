# src/rankline/contracts/protocols.py
"""Protocols at the seam between the ranking engine and persistence.

RankStore is everything the engine needs from the backing collection.
Every method runs inside the caller's open transaction; implementations
never commit or roll back.

Scope Pattern:
    Each method takes the scope VALUE of the record being placed. The store
    knows which column (if any) holds the scope and applies the filter
    uniformly - the engine never special-cases scoped vs. unscoped tables.

PreWriteHook is the callback the persistence layer invokes before it
finalizes an insert, update or delete. It receives the pending change set
and returns the change set to actually write.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rankline.contracts.enums import LifecycleAction, SortOrder
    from rankline.contracts.records import PendingWrite, RankedRow, RankPredicate


@runtime_checkable
class RankStore(Protocol):
    """Rank queries and writes against one ordered collection."""

    def query_ordered(
        self,
        scope: Any,
        order: "SortOrder",
        *,
        limit: int | None = None,
        offset: int = 0,
        exclude: Any = None,
    ) -> Sequence["RankedRow"]:
        """Rows in scope ordered by rank, excluding the given identity."""
        ...

    def query_exact(self, scope: Any, rank: int, *, exclude: Any = None) -> "RankedRow | None":
        """Row in scope holding exactly this rank, if any."""
        ...

    def query_extreme(self, scope: Any, order: "SortOrder", *, exclude: Any = None) -> int | None:
        """Lowest (ASC) or highest (DESC) rank in scope, None when empty."""
        ...

    def bulk_increment(self, scope: Any, predicate: "RankPredicate", delta: int, *, exclude: Any = None) -> int:
        """Add delta to every rank in scope matching predicate.

        Returns:
            Number of rows updated
        """
        ...

    def write_rank(self, identity: Any, rank: int) -> None:
        """Persist a new rank for one row."""
        ...

    def write_many(self, ranks: Iterable[tuple[Any, int]]) -> None:
        """Persist new ranks for several rows."""
        ...


@runtime_checkable
class PreWriteHook(Protocol):
    """Callback run inside the write transaction, before the write."""

    def __call__(self, action: "LifecycleAction", store: RankStore, pending: "PendingWrite") -> Mapping[str, Any]:
        """Return the change set to write for this mutation."""
        ...
