"""Schema description objects (tables, columns, functions)."""

from sql_scaffold.schema.base import Column, Function, SchemaObject, Table

__all__ = ["SchemaObject", "Table", "Column", "Function"]
