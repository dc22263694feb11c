# src/rankline/core/store/repository.py
"""OrderedRepository: writes records with their rank in one transaction.

Every mutation follows the same sequence inside db.connection():

    1. load the persisted row (update/delete)
    2. run the pre-write hook with the pending change set
    3. write the change set the hook returned

The hook may shift or rebalance other rows through the store in step 2.
If step 3 fails, engine.begin() rolls back those writes too.
"""

from collections.abc import Mapping
from typing import Any, Self

from sqlalchemy import Connection, Table, delete, select, update

from rankline.contracts import LifecycleAction, PendingWrite, PreWriteHook, RecordNotFoundError
from rankline.core.config import OrderingSettings
from rankline.core.logging import get_logger, ordering_context
from rankline.core.ranking.engine import RankEngine
from rankline.core.store.database import OrderedDB
from rankline.core.store.rank_store import SqlRankStore
from rankline.core.store.scope import ScopeFilter

slog = get_logger(__name__)


class OrderedRepository:
    """Insert, update, delete and list rows of one ordered table."""

    def __init__(
        self,
        db: OrderedDB,
        table: Table,
        ordering: OrderingSettings | None = None,
        *,
        hook: PreWriteHook | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            db: Database holding the table
            table: Ordered table (see schema.ordered_table)
            ordering: Column names; defaults to OrderingSettings(table=table.name)
            hook: Pre-write hook; defaults to a RankEngine for ordering
        """
        self._db = db
        self._table = table
        self._ordering = ordering if ordering is not None else OrderingSettings(table=table.name)
        self._hook: PreWriteHook = hook if hook is not None else RankEngine.from_settings(self._ordering)
        self._id = table.c[self._ordering.id_column]
        self._rank = table.c[self._ordering.rank_column]
        scope_column = self._ordering.scope_column
        self._scope = ScopeFilter(table.c[scope_column] if scope_column is not None else None)

    @classmethod
    def from_settings(cls, db: OrderedDB, ordering: OrderingSettings) -> Self:
        """Build a repository for a table registered in db.metadata."""
        return cls(db, db.metadata.tables[ordering.table], ordering)

    def _store(self, conn: Connection) -> SqlRankStore:
        return SqlRankStore.from_settings(conn, self._table, self._ordering)

    def _reject_direct_rank(self, changes: Mapping[str, Any]) -> None:
        if self._ordering.rank_column in changes:
            raise ValueError(f"'{self._ordering.rank_column}' is derived from '{self._ordering.position_field}' and cannot be set directly")

    def _writable(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in changes.items() if k != self._ordering.position_field}

    def _load(self, conn: Connection, identity: Any) -> dict[str, Any]:
        row = conn.execute(select(self._table).where(self._id == identity)).mappings().fetchone()
        if row is None:
            raise RecordNotFoundError(self._table.name, identity)
        return dict(row)

    def insert(self, values: Mapping[str, Any]) -> Any:
        """Insert a row at values[position_field] (appended when absent).

        Returns:
            Primary key of the new row
        """
        self._reject_direct_rank(values)
        with ordering_context(self._table.name):
            with self._db.connection() as conn:
                changes = self._hook(LifecycleAction.INSERT, self._store(conn), PendingWrite(changes=dict(values)))
                result = conn.execute(self._table.insert().values(self._writable(changes)))
                identity = result.inserted_primary_key[0] if result.inserted_primary_key else None
            slog.debug("record_inserted", identity=identity, rank=changes.get(self._ordering.rank_column))
        return identity

    def update(self, identity: Any, changes: Mapping[str, Any]) -> None:
        """Apply changes to a row, re-ranking it when position is among them.

        Raises:
            RecordNotFoundError: If no row has this identity
        """
        self._reject_direct_rank(changes)
        with ordering_context(self._table.name):
            with self._db.connection() as conn:
                existing = self._load(conn, identity)
                pending = PendingWrite(identity=identity, changes=dict(changes), existing=existing)
                final = self._writable(self._hook(LifecycleAction.UPDATE, self._store(conn), pending))
                if final:
                    conn.execute(update(self._table).where(self._id == identity).values(final))
            slog.debug("record_updated", identity=identity, fields=sorted(final))

    def delete(self, identity: Any) -> None:
        """Delete a row. Remaining ranks are left untouched.

        Raises:
            RecordNotFoundError: If no row has this identity
        """
        with ordering_context(self._table.name):
            with self._db.connection() as conn:
                existing = self._load(conn, identity)
                self._hook(LifecycleAction.DELETE, self._store(conn), PendingWrite(identity=identity, existing=existing))
                conn.execute(delete(self._table).where(self._id == identity))
            slog.debug("record_deleted", identity=identity)

    def get(self, identity: Any) -> dict[str, Any]:
        """Load one row as a dict.

        Raises:
            RecordNotFoundError: If no row has this identity
        """
        with self._db.connection() as conn:
            return self._load(conn, identity)

    def list_ordered(self, scope: Any = None) -> list[dict[str, Any]]:
        """Rows of one scope ordered by rank (all rows for unscoped tables)."""
        query = self._scope.apply(select(self._table), scope).order_by(self._rank.asc())
        with self._db.connection() as conn:
            return [dict(row) for row in conn.execute(query).mappings()]
