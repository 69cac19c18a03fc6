"""sql-scaffold - Build SQL statements as typed node trees."""

from sql_scaffold.config import Config, load_config, load_strict_mode
from sql_scaffold.errors import (
    ColumnNotFoundError,
    QueryValidationError,
    SqlScaffoldError,
    UnsupportedInputError,
)
from sql_scaffold.generator import RenderContext, render_sql
from sql_scaffold.query import (
    ColumnConstraint,
    CreateTableQuery,
    DropBehavior,
    DropQuery,
    DropType,
)
from sql_scaffold.schema import Column, Function, Table
from sql_scaffold.tree import (
    CustomNode,
    CustomSql,
    FunctionCall,
    InCondition,
    Node,
    NodeList,
    Statement,
)
from sql_scaffold.validator import ValidationContext

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "load_strict_mode",
    "SqlScaffoldError",
    "UnsupportedInputError",
    "QueryValidationError",
    "ColumnNotFoundError",
    "RenderContext",
    "render_sql",
    "ColumnConstraint",
    "CreateTableQuery",
    "DropBehavior",
    "DropQuery",
    "DropType",
    "Table",
    "Column",
    "Function",
    "Node",
    "NodeList",
    "Statement",
    "CustomSql",
    "CustomNode",
    "FunctionCall",
    "InCondition",
    "ValidationContext",
]
