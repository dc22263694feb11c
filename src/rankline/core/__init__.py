"""Core infrastructure: Ranking engine, Store, Configuration, Logging."""

from rankline.core.config import (
    DatabaseSettings,
    LoggingSettings,
    OrderingSettings,
    RanklineSettings,
    load_settings,
)
from rankline.core.logging import (
    configure_from_settings,
    configure_logging,
    get_logger,
    ordering_context,
)
from rankline.core.ranking import MAX_RANK, MIN_RANK, RankEngine, rank_between
from rankline.core.store import (
    OrderedDB,
    OrderedRepository,
    SchemaCompatibilityError,
    SqlRankStore,
    ordered_table,
)

__all__ = [
    "MAX_RANK",
    "MIN_RANK",
    "DatabaseSettings",
    "LoggingSettings",
    "OrderedDB",
    "OrderedRepository",
    "OrderingSettings",
    "RankEngine",
    "RanklineSettings",
    "SchemaCompatibilityError",
    "SqlRankStore",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "ordering_context",
    "load_settings",
    "ordered_table",
    "rank_between",
]
