# tests/conftest.py
"""Shared test fixtures.

Fixture Scoping Strategy
========================
Every database fixture is function-scoped: rank tests assert exact rank
values, so each test needs an empty table. An in-memory SQLite database
is cheap to create.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Iterator

import pytest
from hypothesis import Verbosity, settings
from sqlalchemy import Column, MetaData, String, Table

from rankline.contracts import PendingWrite
from rankline.core.config import OrderingSettings
from rankline.core.ranking.context import RankContext
from rankline.core.store import OrderedDB, OrderedRepository, ordered_table
from tests.fixtures.stores import FakeRankStore

settings.register_profile("ci", max_examples=100, deadline=None)
settings.register_profile("nightly", max_examples=1000, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose, deadline=None)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "ci"))


ITEMS_ORDERING = OrderingSettings(table="items")
TASKS_ORDERING = OrderingSettings(table="tasks", scope_column="board_id")


def build_metadata() -> tuple[MetaData, Table, Table]:
    """Metadata holding one unscoped (items) and one scoped (tasks) table."""
    metadata = MetaData()
    items = ordered_table("items", metadata, Column("title", String(128)))
    tasks = ordered_table("tasks", metadata, Column("title", String(128)), scope_column="board_id")
    return metadata, items, tasks


def make_context(store: FakeRankStore, identity: object = None, scope: object = None) -> RankContext:
    """RankContext over a fake store, scoped when scope is given."""
    existing = {"board_id": scope} if scope is not None else {}
    return RankContext(
        store=store,
        pending=PendingWrite(identity=identity, existing=existing),
        rank_field="rank",
        scope_field="board_id" if scope is not None else None,
    )


@pytest.fixture
def fake_store() -> FakeRankStore:
    return FakeRankStore()


@pytest.fixture
def db() -> Iterator[OrderedDB]:
    metadata, _, _ = build_metadata()
    with OrderedDB.in_memory(metadata) as database:
        yield database


@pytest.fixture
def items(db: OrderedDB) -> OrderedRepository:
    """Repository for the unscoped items table."""
    return OrderedRepository.from_settings(db, ITEMS_ORDERING)


@pytest.fixture
def tasks(db: OrderedDB) -> OrderedRepository:
    """Repository for the tasks table, scoped by board_id."""
    return OrderedRepository.from_settings(db, TASKS_ORDERING)
