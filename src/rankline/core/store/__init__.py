"""Store: SQLAlchemy persistence for ordered collections.

Primary API:
    OrderedRepository - insert/update/delete rows, ranking them in-transaction
    OrderedDB - Database connection management

Building blocks:
    SqlRankStore - RankStore implementation bound to one transaction
    ScopeFilter - scope predicate applied to every query
    ordered_table - table factory with id/rank/scope columns
"""

from rankline.core.store.database import OrderedDB, SchemaCompatibilityError
from rankline.core.store.rank_store import SqlRankStore
from rankline.core.store.repository import OrderedRepository
from rankline.core.store.schema import ordered_table
from rankline.core.store.scope import ScopeFilter

__all__ = [
    "OrderedDB",
    "OrderedRepository",
    "SchemaCompatibilityError",
    "ScopeFilter",
    "SqlRankStore",
    "ordered_table",
]
