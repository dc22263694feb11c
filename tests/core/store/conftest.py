# tests/core/store/conftest.py
"""Fixtures for store tests that need rows at exact ranks."""

from collections.abc import Callable, Iterable
from typing import Any

import pytest

from rankline.core.store import OrderedDB

Seeder = Callable[..., list[Any]]


@pytest.fixture
def seed(db: OrderedDB) -> Seeder:
    """Insert rows at the given ranks, bypassing the ranking engine.

    Returns the primary keys in insertion order.
    """

    def _seed(table_name: str, ranks: Iterable[int], **values: Any) -> list[Any]:
        table = db.metadata.tables[table_name]
        with db.connection() as conn:
            return [conn.execute(table.insert().values(rank=rank, **values)).inserted_primary_key[0] for rank in ranks]

    return _seed
