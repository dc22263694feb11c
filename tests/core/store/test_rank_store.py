# tests/core/store/test_rank_store.py
"""Tests for SqlRankStore against SQLite."""

from collections.abc import Iterator
from typing import Any

import pytest
from sqlalchemy import Connection, Table, select

from rankline.contracts import RankComparison, RankedRow, RankPredicate, RankStore, SortOrder
from rankline.core.store import OrderedDB, SqlRankStore
from tests.conftest import TASKS_ORDERING


@pytest.fixture
def conn(db: OrderedDB) -> Iterator[Connection]:
    with db.connection() as connection:
        yield connection


@pytest.fixture
def items_table(db: OrderedDB) -> Table:
    return db.metadata.tables["items"]


@pytest.fixture
def tasks_table(db: OrderedDB) -> Table:
    return db.metadata.tables["tasks"]


def insert_ranks(conn: Connection, table: Table, ranks: list[int], **values: Any) -> list[Any]:
    return [conn.execute(table.insert().values(rank=rank, **values)).inserted_primary_key[0] for rank in ranks]


def ranks_of(conn: Connection, table: Table) -> list[int]:
    return list(conn.execute(select(table.c.rank).order_by(table.c.id)).scalars())


class TestQueries:
    def test_satisfies_protocol(self, conn: Connection, items_table: Table) -> None:
        assert isinstance(SqlRankStore(conn, items_table), RankStore)

    def test_query_ordered(self, conn: Connection, items_table: Table) -> None:
        a, b, c = insert_ranks(conn, items_table, [30, 10, 20])
        store = SqlRankStore(conn, items_table)

        assert store.query_ordered(None, SortOrder.ASC) == [RankedRow(b, 10), RankedRow(c, 20), RankedRow(a, 30)]
        assert [r.rank for r in store.query_ordered(None, SortOrder.DESC)] == [30, 20, 10]

    def test_query_ordered_window(self, conn: Connection, items_table: Table) -> None:
        insert_ranks(conn, items_table, [10, 20, 30, 40])
        store = SqlRankStore(conn, items_table)

        assert [r.rank for r in store.query_ordered(None, SortOrder.ASC, limit=2, offset=1)] == [20, 30]
        assert [r.rank for r in store.query_ordered(None, SortOrder.ASC, limit=2, offset=3)] == [40]
        assert store.query_ordered(None, SortOrder.ASC, limit=2, offset=9) == []

    def test_query_ordered_excludes(self, conn: Connection, items_table: Table) -> None:
        a, _, _ = insert_ranks(conn, items_table, [10, 20, 30])
        store = SqlRankStore(conn, items_table)

        assert [r.rank for r in store.query_ordered(None, SortOrder.ASC, exclude=a)] == [20, 30]

    def test_query_exact(self, conn: Connection, items_table: Table) -> None:
        a, _ = insert_ranks(conn, items_table, [10, 20])
        store = SqlRankStore(conn, items_table)

        assert store.query_exact(None, 10) == RankedRow(a, 10)
        assert store.query_exact(None, 15) is None
        assert store.query_exact(None, 10, exclude=a) is None

    def test_query_extreme(self, conn: Connection, items_table: Table) -> None:
        insert_ranks(conn, items_table, [5, -5, 50])
        store = SqlRankStore(conn, items_table)

        assert store.query_extreme(None, SortOrder.ASC) == -5
        assert store.query_extreme(None, SortOrder.DESC) == 50

    def test_query_extreme_empty(self, conn: Connection, items_table: Table) -> None:
        assert SqlRankStore(conn, items_table).query_extreme(None, SortOrder.ASC) is None


class TestScoping:
    def test_queries_stay_in_scope(self, conn: Connection, tasks_table: Table) -> None:
        insert_ranks(conn, tasks_table, [1, 2], board_id="a")
        insert_ranks(conn, tasks_table, [100], board_id="b")
        store = SqlRankStore.from_settings(conn, tasks_table, TASKS_ORDERING)

        assert [r.rank for r in store.query_ordered("a", SortOrder.ASC)] == [1, 2]
        assert store.query_extreme("b", SortOrder.ASC) == 100
        assert store.query_exact("a", 100) is None

    def test_null_scope_is_its_own_partition(self, conn: Connection, tasks_table: Table) -> None:
        insert_ranks(conn, tasks_table, [7])
        insert_ranks(conn, tasks_table, [8], board_id="a")
        store = SqlRankStore.from_settings(conn, tasks_table, TASKS_ORDERING)

        assert [r.rank for r in store.query_ordered(None, SortOrder.ASC)] == [7]

    def test_bulk_increment_stays_in_scope(self, conn: Connection, tasks_table: Table) -> None:
        insert_ranks(conn, tasks_table, [1, 2], board_id="a")
        insert_ranks(conn, tasks_table, [1, 2], board_id="b")
        store = SqlRankStore.from_settings(conn, tasks_table, TASKS_ORDERING)

        moved = store.bulk_increment("a", RankPredicate(RankComparison.AT_LEAST, 0), 1)

        assert moved == 2
        assert ranks_of(conn, tasks_table) == [2, 3, 1, 2]


class TestWrites:
    def test_bulk_increment_at_least(self, conn: Connection, items_table: Table) -> None:
        insert_ranks(conn, items_table, [1, 2, 3])
        store = SqlRankStore(conn, items_table)

        assert store.bulk_increment(None, RankPredicate(RankComparison.AT_LEAST, 2), 1) == 2
        assert ranks_of(conn, items_table) == [1, 3, 4]

    def test_bulk_increment_at_most(self, conn: Connection, items_table: Table) -> None:
        insert_ranks(conn, items_table, [1, 2, 3])
        store = SqlRankStore(conn, items_table)

        assert store.bulk_increment(None, RankPredicate(RankComparison.AT_MOST, 2), -1) == 2
        assert ranks_of(conn, items_table) == [0, 1, 3]

    def test_bulk_increment_excludes(self, conn: Connection, items_table: Table) -> None:
        _, b, _ = insert_ranks(conn, items_table, [1, 2, 3])
        store = SqlRankStore(conn, items_table)

        assert store.bulk_increment(None, RankPredicate(RankComparison.AT_LEAST, 1), 1, exclude=b) == 2
        assert ranks_of(conn, items_table) == [2, 2, 4]

    @pytest.mark.parametrize("delta", [0, 2, -5])
    def test_bulk_increment_rejects_large_delta(self, conn: Connection, items_table: Table, delta: int) -> None:
        store = SqlRankStore(conn, items_table)

        with pytest.raises(ValueError, match="shifts by one"):
            store.bulk_increment(None, RankPredicate(RankComparison.AT_LEAST, 0), delta)

    def test_write_rank(self, conn: Connection, items_table: Table) -> None:
        _, b = insert_ranks(conn, items_table, [1, 2])

        SqlRankStore(conn, items_table).write_rank(b, 99)

        assert ranks_of(conn, items_table) == [1, 99]

    def test_write_rank_missing_row(self, conn: Connection, items_table: Table) -> None:
        with pytest.raises(ValueError, match="zero rows affected"):
            SqlRankStore(conn, items_table).write_rank(404, 1)

    def test_write_many(self, conn: Connection, items_table: Table) -> None:
        a, _, c = insert_ranks(conn, items_table, [1, 2, 3])

        SqlRankStore(conn, items_table).write_many([(a, -10), (c, 10)])

        assert ranks_of(conn, items_table) == [-10, 2, 10]
