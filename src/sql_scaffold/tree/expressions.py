"""Expression and condition nodes."""

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import Field

from sql_scaffold import converter
from sql_scaffold.schema.base import Column
from sql_scaffold.tree.nodes import CustomSql, Node, NodeList

if TYPE_CHECKING:
    from sql_scaffold.tree.visitor import NodeVisitor

T = TypeVar("T")

ALL_SYMBOL = CustomSql(sql="*")


class FunctionCall(Node):
    """A function call: ``NAME([DISTINCT ]param1, ... paramN)``.

    Attributes:
        function: The function name node
        params: Call parameters, converted as column values
        is_distinct: Whether DISTINCT prefixes the parameter list
    """

    function: Node = Field(..., description="The function name")
    params: NodeList = Field(default_factory=NodeList, description="Call parameters")
    is_distinct: bool = Field(default=False, description="Whether DISTINCT is emitted")

    def __init__(self, function: "converter.FunctionInput", **data: Any):
        super().__init__(function=converter.CUSTOM_FUNCTION.convert(function), **data)

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_function_call(self)

    def set_is_distinct(self, is_distinct: bool) -> "FunctionCall":
        self.is_distinct = is_distinct
        return self

    def add_custom_params(self, *params: "converter.ValueInput") -> "FunctionCall":
        """Add parameters of any value shape (columns, literals, nodes, subqueries)."""
        self.params.add_all(converter.COLUMN_VALUE, params)
        return self

    def add_column_params(self, *columns: Column) -> "FunctionCall":
        """Add column parameters, rendered as ``alias.column``."""
        return self.add_custom_params(*columns)

    def add_numeric_value_param(self, value: Any) -> "FunctionCall":
        return self.add_custom_params(value)

    @classmethod
    def avg(cls) -> "FunctionCall":
        return cls(CustomSql(sql="AVG"))

    @classmethod
    def min(cls) -> "FunctionCall":
        return cls(CustomSql(sql="MIN"))

    @classmethod
    def max(cls) -> "FunctionCall":
        return cls(CustomSql(sql="MAX"))

    @classmethod
    def sum(cls) -> "FunctionCall":
        return cls(CustomSql(sql="SUM"))

    @classmethod
    def count(cls) -> "FunctionCall":
        return cls(CustomSql(sql="COUNT"))

    @classmethod
    def count_all(cls) -> "FunctionCall":
        """``COUNT(*)``."""
        return cls.count().add_custom_params(ALL_SYMBOL.model_copy())


class InCondition(Node):
    """An IN condition: ``(<left> IN (<v1>, <v2>, ...) )``.

    A negated condition with no values is empty and renders to nothing, so it
    contributes nothing to an enclosing list. A non-negated condition with no
    values still renders, as ``(<left> IN () )``.

    Attributes:
        left: The tested column or expression
        right_values: The candidate values
        negate: Whether to render NOT IN
    """

    left: Node = Field(..., description="The tested expression")
    right_values: NodeList = Field(default_factory=NodeList, description="Candidate values")
    negate: bool = Field(default=False, description="Whether the condition is negated")

    def __init__(self, left: "converter.ColumnInput", *values: "converter.ValueInput", **data: Any):
        super().__init__(left=converter.COLUMN.convert(left), **data)
        self.right_values.add_all(converter.COLUMN_VALUE, values)

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_in_condition(self)

    def is_empty(self) -> bool:
        return self.negate and self.right_values.is_empty()

    def add_object(self, value: "converter.ValueInput") -> "InCondition":
        return self.add_objects(value)

    def add_objects(self, *values: "converter.ValueInput") -> "InCondition":
        self.right_values.add_all(converter.COLUMN_VALUE, values)
        return self

    def set_negate(self, negate: bool) -> "InCondition":
        self.negate = negate
        return self
