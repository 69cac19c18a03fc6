"""Query tree module: nodes, composites and the visitor interface."""

from sql_scaffold.tree.expressions import FunctionCall, InCondition
from sql_scaffold.tree.nodes import (
    ColumnRef,
    CustomNode,
    CustomSql,
    FunctionRef,
    Node,
    NodeList,
    Statement,
    Subquery,
    TableRef,
    TypedColumn,
    ValueLiteral,
)
from sql_scaffold.tree.visitor import NodeVisitor

__all__ = [
    "Node",
    "NodeList",
    "Statement",
    "CustomSql",
    "CustomNode",
    "ValueLiteral",
    "TableRef",
    "ColumnRef",
    "TypedColumn",
    "FunctionRef",
    "Subquery",
    "FunctionCall",
    "InCondition",
    "NodeVisitor",
]
