"""Visitor pattern for traversing and processing query tree nodes.

This module provides the abstract visitor interface implemented by the SQL
renderer and the reference collector used during validation.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from sql_scaffold.query.create_table import ConstrainedColumn, CreateTableQuery
    from sql_scaffold.query.drop import DropQuery
    from sql_scaffold.tree.expressions import FunctionCall, InCondition
    from sql_scaffold.tree.nodes import (
        ColumnRef,
        CustomNode,
        CustomSql,
        FunctionRef,
        NodeList,
        Subquery,
        TableRef,
        TypedColumn,
        ValueLiteral,
    )

T = TypeVar("T")


class NodeVisitor(ABC, Generic[T]):
    """Abstract base class for query tree visitors.

    There is one method per node kind, so every visitor handles the complete
    grammar surface. Caller-defined fragments arrive through
    ``visit_custom_node``.
    """

    @abstractmethod
    def visit_custom_sql(self, node: "CustomSql") -> T:
        pass

    @abstractmethod
    def visit_value(self, node: "ValueLiteral") -> T:
        pass

    @abstractmethod
    def visit_table_ref(self, node: "TableRef") -> T:
        pass

    @abstractmethod
    def visit_column_ref(self, node: "ColumnRef") -> T:
        pass

    @abstractmethod
    def visit_typed_column(self, node: "TypedColumn") -> T:
        pass

    @abstractmethod
    def visit_function_ref(self, node: "FunctionRef") -> T:
        pass

    @abstractmethod
    def visit_node_list(self, node: "NodeList") -> T:
        pass

    @abstractmethod
    def visit_subquery(self, node: "Subquery") -> T:
        pass

    @abstractmethod
    def visit_custom_node(self, node: "CustomNode") -> T:
        pass

    @abstractmethod
    def visit_function_call(self, node: "FunctionCall") -> T:
        pass

    @abstractmethod
    def visit_in_condition(self, node: "InCondition") -> T:
        pass

    @abstractmethod
    def visit_constrained_column(self, node: "ConstrainedColumn") -> T:
        """Visit a column declaration wrapped with a constraint."""
        pass

    @abstractmethod
    def visit_create_table(self, node: "CreateTableQuery") -> T:
        """Visit a CREATE TABLE statement."""
        pass

    @abstractmethod
    def visit_drop(self, node: "DropQuery") -> T:
        """Visit a DROP statement."""
        pass
