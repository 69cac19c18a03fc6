"""Reference collection and consistency checks for query validation.

Validation walks the complete tree first, accumulating every table and column
referenced anywhere in it, and only then evaluates rules against those sets.
"""

import logging
from typing import TYPE_CHECKING, Set

from sql_scaffold.errors import QueryValidationError
from sql_scaffold.schema.base import Column, Table
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

logger = logging.getLogger(__name__)


class ValidationContext:
    """Accumulator of the schema objects referenced by a tree.

    Attributes:
        tables: Every table referenced anywhere in the tree
        columns: Every column referenced anywhere in the tree
    """

    def __init__(self) -> None:
        self.tables: Set[Table] = set()
        self.columns: Set[Column] = set()

    def add_table(self, table: Table) -> None:
        self.tables.add(table)

    def add_column(self, column: Column) -> None:
        self.columns.add(column)

    def check_column_tables(self) -> None:
        """Check that every referenced column's owning table is referenced too.

        Free-standing columns (with no owning table) are not checked.

        Raises:
            QueryValidationError: If a column belongs to an unreferenced table
        """
        orphans = sorted(
            f"{column.table.full_name}.{column.name}"
            for column in self.columns
            if column.table is not None and column.table not in self.tables
        )
        if orphans:
            logger.debug("Columns reference undeclared tables: %s", orphans)
            raise QueryValidationError(
                f"Columns used for undefined tables: {', '.join(orphans)}"
            )


class ReferenceCollector(NodeVisitor[None]):
    """Query tree visitor that records referenced tables and columns.

    The walk descends into every child, nested statements included.
    """

    def __init__(self, vcontext: ValidationContext):
        self.vcontext = vcontext

    def _collect(self, node: Node) -> None:
        node.accept(self)

    def visit_custom_sql(self, node: CustomSql) -> None:
        pass

    def visit_value(self, node: ValueLiteral) -> None:
        pass

    def visit_table_ref(self, node: TableRef) -> None:
        self.vcontext.add_table(node.table)

    def visit_column_ref(self, node: ColumnRef) -> None:
        self.vcontext.add_column(node.column)

    def visit_typed_column(self, node: TypedColumn) -> None:
        self.vcontext.add_column(node.column)

    def visit_function_ref(self, node: FunctionRef) -> None:
        pass

    def visit_node_list(self, node: NodeList) -> None:
        for item in node.items:
            self._collect(item)

    def visit_subquery(self, node: Subquery) -> None:
        self._collect(node.query)

    def visit_custom_node(self, node: CustomNode) -> None:
        node.collect_custom(self.vcontext)

    def visit_function_call(self, node: "FunctionCall") -> None:
        self._collect(node.function)
        self._collect(node.params)

    def visit_in_condition(self, node: "InCondition") -> None:
        self._collect(node.left)
        self._collect(node.right_values)

    def visit_constrained_column(self, node: "ConstrainedColumn") -> None:
        self._collect(node.column)

    def visit_create_table(self, node: "CreateTableQuery") -> None:
        self._collect(node.target)
        self._collect(node.columns)

    def visit_drop(self, node: "DropQuery") -> None:
        self._collect(node.target)
