"""SQL implementation of the RankStore protocol.

A SqlRankStore is bound to one open Connection, i.e. one transaction.
It never commits or rolls back - the owner of the connection does.
"""

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, Self

from sqlalchemy import Connection, Select, Table, select, update

from rankline.contracts import RankComparison, RankedRow, RankPredicate, SortOrder
from rankline.core.store.scope import ScopeFilter

if TYPE_CHECKING:
    from rankline.core.config import OrderingSettings


class SqlRankStore:
    """Rank queries and writes against one table, scoped and transactional."""

    def __init__(
        self,
        conn: Connection,
        table: Table,
        *,
        id_column: str = "id",
        rank_column: str = "rank",
        scope_column: str | None = None,
    ) -> None:
        self._conn = conn
        self._table = table
        self._id = table.c[id_column]
        self._rank = table.c[rank_column]
        self._scope = ScopeFilter(table.c[scope_column] if scope_column is not None else None)

    @classmethod
    def from_settings(cls, conn: Connection, table: Table, ordering: "OrderingSettings") -> Self:
        return cls(
            conn,
            table,
            id_column=ordering.id_column,
            rank_column=ordering.rank_column,
            scope_column=ordering.scope_column,
        )

    def _rows(self, scope: Any, exclude: Any) -> Select[Any]:
        query = select(self._id, self._rank)
        if exclude is not None:
            query = query.where(self._id != exclude)
        return self._scope.apply(query, scope)

    def _order(self, order: SortOrder) -> Any:
        return self._rank.asc() if order == SortOrder.ASC else self._rank.desc()

    def query_ordered(
        self,
        scope: Any,
        order: SortOrder,
        *,
        limit: int | None = None,
        offset: int = 0,
        exclude: Any = None,
    ) -> Sequence[RankedRow]:
        query = self._rows(scope, exclude).order_by(self._order(order))
        if limit is not None:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)
        return [RankedRow(identity=identity, rank=rank) for identity, rank in self._conn.execute(query)]

    def query_exact(self, scope: Any, rank: int, *, exclude: Any = None) -> RankedRow | None:
        query = self._rows(scope, exclude).where(self._rank == rank).limit(1)
        row = self._conn.execute(query).fetchone()
        if row is None:
            return None
        return RankedRow(identity=row[0], rank=row[1])

    def query_extreme(self, scope: Any, order: SortOrder, *, exclude: Any = None) -> int | None:
        query = self._rows(scope, exclude).order_by(self._order(order)).limit(1)
        row = self._conn.execute(query).fetchone()
        return None if row is None else int(row[1])

    def bulk_increment(self, scope: Any, predicate: RankPredicate, delta: int, *, exclude: Any = None) -> int:
        if delta not in (1, -1):
            raise ValueError(f"bulk_increment shifts by one, got delta={delta}")
        if predicate.comparison == RankComparison.AT_MOST:
            condition = self._rank <= predicate.rank
        else:
            condition = self._rank >= predicate.rank
        stmt = update(self._table).where(condition).values({self._rank: self._rank + delta})
        if exclude is not None:
            stmt = stmt.where(self._id != exclude)
        result = self._conn.execute(self._scope.apply(stmt, scope))
        return int(result.rowcount)

    def write_rank(self, identity: Any, rank: int) -> None:
        """Persist a new rank for one row.

        Raises:
            ValueError: If zero rows are affected (row vanished mid-transaction)
        """
        result = self._conn.execute(update(self._table).where(self._id == identity).values({self._rank: rank}))
        if result.rowcount == 0:
            raise ValueError(f"write_rank: zero rows affected - no row with identity {identity!r}")

    def write_many(self, ranks: Iterable[tuple[Any, int]]) -> None:
        for identity, rank in ranks:
            self.write_rank(identity, rank)
