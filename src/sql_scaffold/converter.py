"""Conversion of caller input into query tree nodes.

Each public "add" operation accepts heterogeneous input (schema objects,
pre-built nodes, raw SQL text, literal values, nested statements). A
``Converter`` holds the ordered rules for one call site and picks the first
rule whose type matches the input.
"""

import datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, List, Tuple, Type, Union

from sql_scaffold.errors import UnsupportedInputError
from sql_scaffold.schema.base import Column, Function, Table
from sql_scaffold.tree.nodes import (
    ColumnRef,
    CustomSql,
    FunctionRef,
    Node,
    Statement,
    Subquery,
    TableRef,
    TypedColumn,
    ValueLiteral,
)

ConversionRule = Tuple[Union[Type, Tuple[Type, ...]], Callable[[Any], Node]]

LITERAL_TYPES = (type(None), bool, int, float, Decimal, str, datetime.date)

# Accepted input shapes per call site
TypedColumnInput = Union[Node, Column, str]
ColumnInput = Union[Node, Column, str]
ValueInput = Union[Statement, Node, Column, None, bool, int, float, Decimal, str, datetime.date]
TableInput = Union[Node, Table, str]
FunctionInput = Union[Node, Function, str]


def _pass_through(node: Node) -> Node:
    return node


class Converter:
    """Ordered conversion rules for one call site.

    Rules are tried in order; a value that is already a node is passed through
    unchanged by every converter, so conversion never double-wraps.
    """

    def __init__(self, name: str, rules: List[ConversionRule]):
        """Initialize the converter.

        Args:
            name: Call-site name, reported in unsupported-input errors
            rules: Ordered ``(type, factory)`` pairs
        """
        self.name = name
        self.rules = tuple(rules)

    def convert(self, value: Any) -> Node:
        """Convert a single value into a node.

        Raises:
            UnsupportedInputError: If no rule accepts the value's type
        """
        for input_type, factory in self.rules:
            if isinstance(value, input_type):
                return factory(value)
        raise UnsupportedInputError(self.name, value)

    def convert_all(self, values: Iterable[Any]) -> List[Node]:
        """Convert every value, preserving order."""
        return [self.convert(value) for value in values]

    def __repr__(self) -> str:
        return f"Converter({self.name!r})"


TYPED_COLUMN = Converter(
    "typed column",
    [
        (Node, _pass_through),
        (Column, lambda column: TypedColumn(column=column)),
        (str, lambda sql: CustomSql(sql=sql)),
    ],
)

COLUMN = Converter(
    "column",
    [
        (Node, _pass_through),
        (Column, lambda column: ColumnRef(column=column)),
        (str, lambda sql: CustomSql(sql=sql)),
    ],
)

COLUMN_VALUE = Converter(
    "column value",
    [
        (Statement, lambda query: Subquery(query=query)),
        (Node, _pass_through),
        (Column, lambda column: ColumnRef(column=column)),
        (LITERAL_TYPES, lambda value: ValueLiteral(value=value)),
    ],
)

CUSTOM_TABLE = Converter(
    "table",
    [
        (Node, _pass_through),
        (Table, lambda table: TableRef(table=table)),
        (str, lambda sql: CustomSql(sql=sql)),
    ],
)

CUSTOM_FUNCTION = Converter(
    "function",
    [
        (Node, _pass_through),
        (Function, lambda function: FunctionRef(function=function)),
        (str, lambda sql: CustomSql(sql=sql)),
    ],
)
