# tests/fixtures/__init__.py
"""Shared test doubles for rankline tests.

Available fakes:
- FakeRankStore: in-memory RankStore with call recording
"""

from tests.fixtures.stores import FakeRankStore

__all__ = [
    "FakeRankStore",
]
