"""Statement builders."""

from sql_scaffold.query.create_table import (
    ColumnConstraint,
    ConstrainedColumn,
    CreateStatement,
    CreateTableQuery,
)
from sql_scaffold.query.drop import DropBehavior, DropQuery, DropType

__all__ = [
    "ColumnConstraint",
    "ConstrainedColumn",
    "CreateStatement",
    "CreateTableQuery",
    "DropBehavior",
    "DropQuery",
    "DropType",
]
