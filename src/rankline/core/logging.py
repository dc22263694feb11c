# src/rankline/core/logging.py
"""Structured logging for rankline.

Engine and store modules log through get_logger(). Events carry the
ordering context bound by ordering_context(), so a "rank_rebalanced" line
says which table and scope was rebalanced without every call site
passing them:

    with ordering_context("tasks", scope="board-7"):
        engine.before_insert(store, pending)
    # -> event=rank_rebalanced table=tasks scope=board-7 rows=12

configure_logging() routes stdlib records (SQLAlchemy included) through
the same structlog processors, so one run emits one format.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

from rankline.core.config import LoggingSettings

# Statement and pool chatter; a rebalance issues one UPDATE per row
_SQLALCHEMY_LOGGERS: tuple[str, ...] = ("sqlalchemy.engine", "sqlalchemy.pool")


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(json_output: bool, stream: TextIO) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_output: Emit one JSON object per line instead of console text
        level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream, stdout by default
    """
    out = stream if stream is not None else sys.stdout
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    final: list[Any] = [ProcessorFormatter.remove_processors_meta]
    if json_output:
        final.append(structlog.processors.format_exc_info)
    final.append(_renderer(json_output, out))

    handler = logging.StreamHandler(out)
    handler.setFormatter(ProcessorFormatter(processors=final, foreign_pre_chain=shared))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # SQL echo only when explicitly asked for at DEBUG
    for name in _SQLALCHEMY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def configure_from_settings(settings: LoggingSettings, *, stream: TextIO | None = None) -> None:
    configure_logging(json_output=settings.json_output, level=settings.level, stream=stream)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


@contextmanager
def ordering_context(table: str, **values: Any) -> Iterator[None]:
    """Bind table (and e.g. scope) to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(table=table, **values):
        yield
