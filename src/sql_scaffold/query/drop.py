"""DROP statement builder."""

from enum import Enum
from typing import Any, Optional, TypeVar

from pydantic import Field

from sql_scaffold import converter
from sql_scaffold.tree.nodes import Node, Statement
from sql_scaffold.tree.visitor import NodeVisitor

T = TypeVar("T")


class DropType(str, Enum):
    """Kinds of objects a DROP statement can remove."""

    TABLE = "TABLE"
    VIEW = "VIEW"
    INDEX = "INDEX"
    SEQUENCE = "SEQUENCE"
    SCHEMA = "SCHEMA"
    FUNCTION = "FUNCTION"
    USER = "USER"
    ROLE = "ROLE"


class DropBehavior(str, Enum):
    """Trailing dependency behaviour of a DROP statement."""

    CASCADE = "CASCADE"
    RESTRICT = "RESTRICT"


class DropQuery(Statement):
    """Generates ``DROP <type> <target>[ CASCADE|RESTRICT]``.

    The target is never rendered with an alias.

    Attributes:
        drop_type: Kind of object dropped
        target: The dropped object
        behavior: Optional CASCADE/RESTRICT clause
    """

    drop_type: DropType = Field(..., description="Kind of object dropped")
    target: Node = Field(..., description="The dropped object")
    behavior: Optional[DropBehavior] = Field(default=None, description="Dependency behaviour")

    def __init__(self, drop_type: DropType, target: "converter.TableInput", **data: Any):
        super().__init__(
            drop_type=drop_type, target=converter.CUSTOM_TABLE.convert(target), **data
        )

    def accept(self, visitor: NodeVisitor[T]) -> T:
        return visitor.visit_drop(self)

    def set_behavior(self, behavior: Optional[DropBehavior]) -> "DropQuery":
        self.behavior = behavior
        return self

    @classmethod
    def drop_table(cls, table: "converter.TableInput") -> "DropQuery":
        return cls(DropType.TABLE, table)

    @classmethod
    def drop_view(cls, view: "converter.TableInput") -> "DropQuery":
        return cls(DropType.VIEW, view)
