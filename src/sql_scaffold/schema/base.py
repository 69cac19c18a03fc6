"""Schema description objects referenced by query nodes.

Tables, columns and functions are owned by the caller. Nodes only hold
references to them, so equality and hashing use object identity.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class SchemaObject(BaseModel):
    """Base class for tables, columns and functions.

    Schema objects compare by identity so they can be collected into reference
    sets during validation.
    """

    model_config = ConfigDict(frozen=False)

    name: str = Field(..., description="The object name")

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)


class Column(SchemaObject):
    """Represents a single column of a table.

    Attributes:
        name: The column name.
        type_name: The SQL type used in column declarations (e.g., 'VARCHAR').
        type_length: Optional length/precision appended to the type (e.g., 255).
    """

    type_name: Optional[str] = Field(default=None, description="SQL type name")
    type_length: Optional[int] = Field(default=None, description="Type length or precision")

    _table: Optional["Table"] = PrivateAttr(default=None)

    @property
    def table(self) -> Optional["Table"]:
        """The table this column belongs to, or None for a free-standing column."""
        return self._table

    @property
    def type_clause(self) -> Optional[str]:
        """Return the type as it appears in a column declaration.

        Returns:
            'TYPE' or 'TYPE(length)', or None when no type is set
        """
        if not self.type_name:
            return None
        if self.type_length is not None:
            return f"{self.type_name}({self.type_length})"
        return self.type_name


class Table(SchemaObject):
    """Represents a database table and its ordered columns.

    Attributes:
        name: The table name.
        alias: Alias used when the table is referenced in aliased positions.
        schema_name: Optional schema/database qualifier.
        columns: Declared columns, in declaration order.
    """

    alias: Optional[str] = Field(default=None, description="Table alias")
    schema_name: Optional[str] = Field(default=None, description="The schema/database name")
    columns: List[Column] = Field(default_factory=list, description="Declared columns")

    def model_post_init(self, __context) -> None:
        for column in self.columns:
            column._table = self

    def add_column(
        self, name: str, type_name: Optional[str] = None, type_length: Optional[int] = None
    ) -> Column:
        """Declare a new column on this table.

        Args:
            name: The column name
            type_name: Optional SQL type name
            type_length: Optional type length or precision

        Returns:
            The new Column, bound to this table
        """
        column = Column(name=name, type_name=type_name, type_length=type_length)
        column._table = self
        self.columns.append(column)
        return column

    def find_column(self, name: str) -> Optional[Column]:
        """Return the first declared column with the given name, if any."""
        return next((c for c in self.columns if c.name == name), None)

    @property
    def full_name(self) -> str:
        """Get the qualified table name.

        Returns:
            'schema.table' when a schema is set, otherwise 'table'
        """
        if self.schema_name:
            return f"{self.schema_name}.{self.name}"
        return self.name


class Function(SchemaObject):
    """Represents a database function that can be called in expressions."""

    schema_name: Optional[str] = Field(default=None, description="The schema/database name")

    @property
    def full_name(self) -> str:
        if self.schema_name:
            return f"{self.schema_name}.{self.name}"
        return self.name
