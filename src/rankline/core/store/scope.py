"""Scope filter applied to every rank query and bulk update."""

from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, Select, Update

_Stmt = TypeVar("_Stmt", Select[Any], Update)


@dataclass(frozen=True)
class ScopeFilter:
    """Restricts statements to rows sharing one scope value.

    column is None when the table has no scope: the whole table is one
    scope and apply() returns the statement untouched. A None scope VALUE on
    a scoped table matches rows whose scope IS NULL.
    """

    column: ColumnElement[Any] | None = None

    def apply(self, stmt: _Stmt, value: Any) -> _Stmt:
        if self.column is None:
            return stmt
        if value is None:
            return stmt.where(self.column.is_(None))
        return stmt.where(self.column == value)
