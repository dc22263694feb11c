# src/rankline/core/ranking/engine.py
"""RankEngine: lifecycle entry points for rank maintenance.

The persistence layer calls the engine once per mutation, inside the
transaction that writes the record:

    insert  -> before_insert()  always computes a rank
    update  -> before_update()  computes a rank only if position changed
    delete  -> before_delete()  no-op, gaps in rank space are inert

Each entry point takes the pending write and returns the change set to
persist: the transient position field is removed and the rank is added.
Shifts and rebalances of OTHER rows happen as side effects through the
store before the entry point returns.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Self

from rankline.contracts import LifecycleAction, PendingWrite, Position, RankStore
from rankline.core.logging import get_logger
from rankline.core.ranking.assignment import candidate_rank
from rankline.core.ranking.conflicts import ensure_unique_rank
from rankline.core.ranking.context import RankContext

if TYPE_CHECKING:
    from rankline.core.config import OrderingSettings

slog = get_logger(__name__)


class RankEngine:
    """Computes ranks for records of one ordered collection.

    Satisfies the PreWriteHook protocol, so an instance can be handed
    directly to OrderedRepository.
    """

    def __init__(
        self,
        *,
        rank_field: str = "rank",
        position_field: str = "position",
        scope_field: str | None = None,
    ) -> None:
        self.rank_field = rank_field
        self.position_field = position_field
        self.scope_field = scope_field

    @classmethod
    def from_settings(cls, ordering: "OrderingSettings") -> Self:
        return cls(
            rank_field=ordering.rank_column,
            position_field=ordering.position_field,
            scope_field=ordering.scope_column,
        )

    def __call__(self, action: LifecycleAction, store: RankStore, pending: PendingWrite) -> Mapping[str, Any]:
        return self.resolve(action, store, pending)

    def resolve(self, action: LifecycleAction, store: RankStore, pending: PendingWrite) -> dict[str, Any]:
        """Dispatch to the entry point for this lifecycle action."""
        match action:
            case LifecycleAction.INSERT:
                return self.before_insert(store, pending)
            case LifecycleAction.UPDATE:
                return self.before_update(store, pending)
            case LifecycleAction.DELETE:
                return self.before_delete(store, pending)
        raise ValueError(f"Unknown lifecycle action: {action!r}")

    def before_insert(self, store: RankStore, pending: PendingWrite) -> dict[str, Any]:
        position = Position.coerce(pending.get_field(self.position_field))
        return self._place(store, pending, position)

    def before_update(self, store: RankStore, pending: PendingWrite) -> dict[str, Any]:
        """Re-rank only when position changed.

        Moving a record to another scope without a position appends it to
        the end of its new scope - its old rank means nothing there.
        """
        if pending.has_change(self.position_field):
            position = Position.coerce(pending.changes[self.position_field])
        elif self._scope_changed(pending):
            position = Position.unset()
        else:
            return dict(pending.changes)
        return self._place(store, pending, position)

    def before_delete(self, store: RankStore, pending: PendingWrite) -> dict[str, Any]:
        return dict(pending.changes)

    def _scope_changed(self, pending: PendingWrite) -> bool:
        if self.scope_field is None or not pending.has_change(self.scope_field):
            return False
        return bool(pending.changes[self.scope_field] != pending.existing.get(self.scope_field))

    def _place(self, store: RankStore, pending: PendingWrite, position: Position) -> dict[str, Any]:
        ctx = RankContext(
            store=store,
            pending=pending.without_change(self.position_field),
            rank_field=self.rank_field,
            scope_field=self.scope_field,
        )
        ctx.put_rank(candidate_rank(ctx, position))
        direction = ensure_unique_rank(ctx, position)
        slog.debug(
            "rank_resolved",
            identity=ctx.identity,
            position=position.index if position.is_index else position.kind,
            rank=ctx.rank,
            resolution=direction,
            scope=ctx.scope,
        )
        return dict(ctx.pending.changes)
