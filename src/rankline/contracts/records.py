"""Records exchanged between the ranking engine and its store.

PendingWrite mirrors a change set: field values about to be written plus
the values already persisted for the row (empty for inserts). Lookups go
through get_field(), which prefers the pending change - the same resolution
the persistence layer applies when it writes.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from rankline.contracts.enums import RankComparison


@dataclass(frozen=True)
class RankedRow:
    """Identity and rank of one row, as returned by store queries."""

    identity: Any
    rank: int


@dataclass(frozen=True)
class RankPredicate:
    """Selects the band of ranks a bulk shift applies to."""

    comparison: RankComparison
    rank: int


@dataclass(frozen=True)
class PendingWrite:
    """A record mutation awaiting its pre-write hook.

    Attributes:
        identity: Primary key of the row, None for rows not yet inserted
        changes: Field values this write sets
        existing: Field values already persisted (empty for inserts)
    """

    identity: Any = None
    changes: Mapping[str, Any] = field(default_factory=dict)
    existing: Mapping[str, Any] = field(default_factory=dict)

    def has_change(self, name: str) -> bool:
        return name in self.changes

    def get_field(self, name: str) -> Any:
        """Value of a field after this write is applied."""
        if name in self.changes:
            return self.changes[name]
        return self.existing.get(name)

    def with_changes(self, **updates: Any) -> "PendingWrite":
        return replace(self, changes={**self.changes, **updates})

    def without_change(self, name: str) -> "PendingWrite":
        return replace(self, changes={k: v for k, v in self.changes.items() if k != name})
