"""CREATE TABLE statement builder."""

import logging
from abc import abstractmethod
from enum import Enum
from typing import Any, Dict, Optional, TypeVar

from pydantic import ConfigDict, Field, PrivateAttr

from sql_scaffold import converter
from sql_scaffold.config import load_strict_mode
from sql_scaffold.errors import ColumnNotFoundError, QueryValidationError
from sql_scaffold.query.drop import DropQuery, DropType
from sql_scaffold.schema.base import Column, Table
from sql_scaffold.tree.nodes import Node, NodeList, Statement, TypedColumn
from sql_scaffold.tree.visitor import NodeVisitor
from sql_scaffold.validator.references import ValidationContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ColumnConstraint(str, Enum):
    """Column-level constraints; each value is the exact trailing clause."""

    NOT_NULL = " NOT NULL"
    UNIQUE = " UNIQUE"
    PRIMARY_KEY = " PRIMARY KEY"


class ConstrainedColumn(Node):
    """Wrapper around a column declaration that appends a constraint clause.

    Attributes:
        column: The wrapped column declaration
        constraint: The constraint rendered after the column
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    column: Node = Field(..., description="The wrapped column declaration")
    constraint: ColumnConstraint = Field(..., description="The attached constraint")

    def accept(self, visitor: NodeVisitor[T]) -> T:
        return visitor.visit_constrained_column(self)


def _declares(node: Node, column: Column) -> bool:
    """Whether ``node`` is a declaration of ``column``, constrained or not."""
    if isinstance(node, ConstrainedColumn):
        node = node.column
    return isinstance(node, TypedColumn) and node.column is column


class CreateStatement(Statement):
    """Base class for statements that create a named database object.

    Attributes:
        target: The created object
        table_space: Optional tablespace the object is created in
    """

    target: Node = Field(..., description="The created object")
    table_space: Optional[str] = Field(default=None, description="Tablespace name")

    def set_table_space(self, table_space: Optional[str]) -> "CreateStatement":
        self.table_space = table_space
        return self

    @abstractmethod
    def get_drop_query(self) -> DropQuery:
        """Return a DROP statement for the object this statement creates."""
        pass


class CreateTableQuery(CreateStatement):
    """Generates ``CREATE TABLE <table> (<column>, ...)[ TABLESPACE <name>]``.

    Column declarations keep their insertion order. Constraints can be attached
    when a column is added or later through ``set_column_constraint``, which
    replaces the declaration in place.

    Example:
        >>> table = Table(name="users")
        >>> user_id = table.add_column("id", "INTEGER")
        >>> query = CreateTableQuery(table, include_columns=True)
        >>> str(query.set_column_constraint(user_id, ColumnConstraint.PRIMARY_KEY))
        'CREATE TABLE users (id INTEGER PRIMARY KEY)'
    """

    columns: NodeList = Field(default_factory=NodeList, description="Column declarations")
    strict: bool = Field(default=False, description="Raise when retargeting an unknown column")

    _positions: Dict[Column, int] = PrivateAttr(default_factory=dict)

    def __init__(
        self,
        table: "converter.TableInput",
        include_columns: bool = False,
        strict: Optional[bool] = None,
        **data: Any,
    ):
        """Initialize the CREATE TABLE builder.

        Args:
            table: The table to create (a Table, raw SQL text or a node)
            include_columns: Add every declared column of ``table``
            strict: Raise ColumnNotFoundError when ``set_column_constraint``
                misses; defaults to the configured strict mode
        """
        if strict is None:
            strict = load_strict_mode()
        super().__init__(target=converter.CUSTOM_TABLE.convert(table), strict=strict, **data)
        if include_columns and isinstance(table, Table):
            self.add_custom_columns(*table.columns)

    def accept(self, visitor: NodeVisitor[T]) -> T:
        return visitor.visit_create_table(self)

    def _add(self, value: Any) -> int:
        node = converter.TYPED_COLUMN.convert(value)
        index = self.columns.add_node(node)
        if isinstance(node, TypedColumn):
            self._positions.setdefault(node.column, index)
        return index

    def add_columns(self, *columns: Column) -> "CreateTableQuery":
        """Add declarations for the given columns."""
        return self.add_custom_columns(*columns)

    def add_custom_columns(self, *columns: "converter.TypedColumnInput") -> "CreateTableQuery":
        """Add column declarations.

        Raw strings should look like ``"<column> <type>"``.
        """
        for column in columns:
            self._add(column)
        return self

    def add_column(self, column: Column, constraint: ColumnConstraint) -> "CreateTableQuery":
        """Add a declaration for ``column`` with ``constraint`` attached."""
        return self.add_custom_column(column, constraint)

    def add_custom_column(
        self, column: "converter.TypedColumnInput", constraint: ColumnConstraint
    ) -> "CreateTableQuery":
        index = self._add(column)
        self.columns.replace_at(
            index, ConstrainedColumn(column=self.columns.items[index], constraint=constraint)
        )
        return self

    def set_column_constraint(
        self, column: Column, constraint: ColumnConstraint
    ) -> "CreateTableQuery":
        """Set the constraint on a previously added column.

        The declaration keeps its position. An existing constraint on the
        column is replaced. A column that was never added is ignored unless
        the builder is strict.

        Raises:
            ColumnNotFoundError: In strict mode, if ``column`` was never added
        """
        index = self._positions.get(column)
        stale = index is not None and (
            index >= len(self.columns) or not _declares(self.columns[index], column)
        )
        if index is None or stale:
            index = self._find_declaration(column)
        if index is None:
            if self.strict:
                raise ColumnNotFoundError(f"Column {column.name!r} was not added to this table")
            logger.debug("Column %r not found; constraint %s ignored", column.name, constraint.name)
            return self

        declaration = self.columns.items[index]
        if isinstance(declaration, ConstrainedColumn):
            declaration = declaration.column
        self.columns.replace_at(
            index, ConstrainedColumn(column=declaration, constraint=constraint)
        )
        return self

    def _find_declaration(self, column: Column) -> Optional[int]:
        """Search for a declaration of ``column`` added without a position handle."""
        for index, node in enumerate(self.columns):
            if _declares(node, column):
                self._positions[column] = index
                return index
        return None

    def get_drop_query(self) -> DropQuery:
        return DropQuery(DropType.TABLE, self.target.model_copy())

    def validate_structure(self, vcontext: ValidationContext) -> None:
        if self.columns.is_empty():
            raise QueryValidationError("Table has no columns")
