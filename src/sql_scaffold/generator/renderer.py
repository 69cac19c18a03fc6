"""SQL generation using the query tree visitor pattern.

The renderer walks the tree in order, each node contributing its text. Nodes
whose grammar needs different positional rules for their subtree (e.g. no
table aliases inside DDL) render their children with a new visitor built on
a derived context; the parent's context is never modified.
"""

import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sql_scaffold.generator.context import DEFAULT_CONTEXT, RenderContext
from sql_scaffold.tree.nodes import (
    ColumnRef,
    CustomNode,
    CustomSql,
    FunctionRef,
    Node,
    NodeList,
    Subquery,
    TableRef,
    TypedColumn,
    ValueLiteral,
)
from sql_scaffold.tree.visitor import NodeVisitor

if TYPE_CHECKING:
    from sql_scaffold.query.create_table import ConstrainedColumn, CreateTableQuery
    from sql_scaffold.query.drop import DropQuery
    from sql_scaffold.tree.expressions import FunctionCall, InCondition


class SqlRenderVisitor(NodeVisitor[str]):
    """Query tree visitor that generates SQL text for each node type."""

    def __init__(self, context: Optional[RenderContext] = None):
        """Initialize the SQL render visitor.

        Args:
            context: Positional rendering flags; defaults to aliasing enabled
        """
        self.context = context if context is not None else DEFAULT_CONTEXT

    def _render(self, node: Node) -> str:
        return node.accept(self)

    def _with_context(self, **changes) -> "SqlRenderVisitor":
        """Build a visitor for a subtree rendered under a derived context."""
        return SqlRenderVisitor(self.context.derive(**changes))

    def visit_custom_sql(self, node: CustomSql) -> str:
        return node.sql

    def visit_value(self, node: ValueLiteral) -> str:
        """Render a literal value.

        Strings, dates and datetimes are single-quoted with embedded quotes
        doubled; booleans render as TRUE/FALSE and None as NULL.
        """
        value = node.value
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, datetime.datetime):
            return self._quote_string(value.isoformat(sep=" "))
        if isinstance(value, datetime.date):
            return self._quote_string(value.isoformat())
        return self._quote_string(str(value))

    def visit_table_ref(self, node: TableRef) -> str:
        table = node.table
        name = self.context.quote_path(table.full_name)
        if self.context.use_table_aliases and table.alias:
            return f"{name} {table.alias}"
        return name

    def visit_column_ref(self, node: ColumnRef) -> str:
        column = node.column
        name = self.context.quote(column.name)
        table = column.table
        if self.context.use_table_aliases and table is not None and table.alias:
            return f"{table.alias}.{name}"
        return name

    def visit_typed_column(self, node: TypedColumn) -> str:
        column = node.column
        name = self.context.quote(column.name)
        type_clause = column.type_clause
        if type_clause:
            return f"{name} {type_clause}"
        return name

    def visit_function_ref(self, node: FunctionRef) -> str:
        return node.function.full_name

    def visit_node_list(self, node: NodeList) -> str:
        # emptiness of an item is its own predicate, not the emptiness of its text
        return node.delimiter.join(
            self._render(item) for item in node.items if not item.is_empty()
        )

    def visit_subquery(self, node: Subquery) -> str:
        return f"({self._render(node.query)})"

    def visit_custom_node(self, node: CustomNode) -> str:
        return node.render_custom(self.context)

    def visit_function_call(self, node: "FunctionCall") -> str:
        distinct = "DISTINCT " if node.is_distinct else ""
        return f"{self._render(node.function)}({distinct}{self._render(node.params)})"

    def visit_in_condition(self, node: "InCondition") -> str:
        if node.is_empty():
            return ""
        operator = " NOT IN (" if node.negate else " IN ("
        return f"({self._render(node.left)}{operator}{self._render(node.right_values)}) )"

    def visit_constrained_column(self, node: "ConstrainedColumn") -> str:
        return f"{self._render(node.column)}{node.constraint.value}"

    def visit_create_table(self, node: "CreateTableQuery") -> str:
        body = self._with_context(use_table_aliases=False)
        sql = f"CREATE TABLE {body._render(node.target)} ({body._render(node.columns)})"
        if node.table_space is not None:
            sql += f" TABLESPACE {node.table_space}"
        return sql

    def visit_drop(self, node: "DropQuery") -> str:
        body = self._with_context(use_table_aliases=False)
        sql = f"DROP {node.drop_type.value} {body._render(node.target)}"
        if node.behavior is not None:
            sql += f" {node.behavior.value}"
        return sql

    @staticmethod
    def _quote_string(text: str) -> str:
        escaped = text.replace("'", "''")
        return f"'{escaped}'"


def render_sql(node: Node, context: Optional[RenderContext] = None) -> str:
    """Convenience function to render any node to SQL text.

    Args:
        node: The root of the tree to render
        context: Render context; aliasing is enabled by default

    Returns:
        The rendered SQL text
    """
    return node.accept(SqlRenderVisitor(context))
