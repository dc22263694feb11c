"""SQLAlchemy table definitions for ordered collections.

Uses SQLAlchemy Core (not ORM) for explicit control over queries
and compatibility with multiple database backends.

The rank column is indexed together with the scope but NOT declared
unique: SQLite checks uniqueness row by row, so a bulk
"rank = rank + 1" shift would trip a unique constraint halfway through
the statement. Uniqueness per scope is maintained by the ranking engine.
"""

from sqlalchemy import Column, Index, Integer, MetaData, String, Table

from rankline.core.ranking.arithmetic import MAX_RANK, MIN_RANK


def ordered_table(
    name: str,
    metadata: MetaData,
    *columns: Column,  # type: ignore[type-arg]  # heterogeneous column types
    id_column: str = "id",
    rank_column: str = "rank",
    scope_column: str | None = None,
) -> Table:
    """Build a table carrying an integer primary key and a rank column.

    Args:
        name: Table name
        metadata: MetaData the table registers with
        *columns: Extra domain columns
        id_column: Autoincrement primary key column name
        rank_column: Rank column name
        scope_column: Optional String(64) partition column

    Returns:
        The new Table
    """
    table_columns: list[Column] = [  # type: ignore[type-arg]
        Column(id_column, Integer, primary_key=True, autoincrement=True),
        Column(rank_column, Integer, nullable=False, comment=f"ordering rank in [{MIN_RANK}, {MAX_RANK}]"),
    ]
    index_columns = [rank_column]
    if scope_column is not None:
        table_columns.append(Column(scope_column, String(64)))
        index_columns = [scope_column, rank_column]

    return Table(
        name,
        metadata,
        *table_columns,
        *columns,
        Index(f"ix_{name}_{'_'.join(index_columns)}", *index_columns),
    )
