"""Query tree node definitions.

Every SQL fragment (a column reference, a literal, a clause list, a complete
statement) is a node. Nodes render themselves through a visitor and report the
schema objects they reference through another visitor, so rendering and
validation stay decoupled from the node structure.
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from sql_scaffold.schema.base import Column, Function, Table

if TYPE_CHECKING:
    from sql_scaffold.converter import Converter
    from sql_scaffold.generator.context import RenderContext
    from sql_scaffold.tree.visitor import NodeVisitor
    from sql_scaffold.validator.references import ValidationContext

logger = logging.getLogger(__name__)

T = TypeVar("T")
# typevar used for methods that return self
TStatement = TypeVar("TStatement", bound="Statement")


class Node(ABC, BaseModel):
    """Base class for all query tree nodes.

    A node is exclusively owned by its parent; schema objects held by a node
    are references only.
    """

    model_config = ConfigDict(frozen=False, arbitrary_types_allowed=True)

    @abstractmethod
    def accept(self, visitor: "NodeVisitor[T]") -> T:
        """Accept a visitor for the visitor pattern.

        Args:
            visitor: The visitor to accept

        Returns:
            Result of the visitor's visit operation
        """
        pass

    def is_empty(self) -> bool:
        """Whether this node contributes nothing when rendered inside a list."""
        return False

    def render(self, context: Optional["RenderContext"] = None) -> str:
        """Render this node to SQL text.

        Args:
            context: Render context; the default context is used when omitted

        Returns:
            The SQL fragment for this node
        """
        from sql_scaffold.generator.renderer import SqlRenderVisitor

        return self.accept(SqlRenderVisitor(context))

    def collect_references(self, vcontext: "ValidationContext") -> None:
        """Add every table and column referenced by this subtree to ``vcontext``."""
        from sql_scaffold.validator.references import ReferenceCollector

        self.accept(ReferenceCollector(vcontext))


class CustomSql(Node):
    """Raw SQL text, rendered verbatim."""

    sql: str = Field(..., description="The raw SQL fragment")

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_custom_sql(self)


class ValueLiteral(Node):
    """A literal value: None, bool, number, string, date or datetime."""

    value: Any = Field(default=None, description="The Python value to render as a literal")

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_value(self)


class TableRef(Node):
    """Reference to a table, rendered with its alias where aliases are enabled."""

    table: Table = Field(..., description="The referenced table")

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_table_ref(self)


class ColumnRef(Node):
    """Reference to a column, qualified by its table alias where aliases are enabled."""

    column: Column = Field(..., description="The referenced column")

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_column_ref(self)


class TypedColumn(Node):
    """A column declaration: the column name followed by its type."""

    column: Column = Field(..., description="The declared column")

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_typed_column(self)


class FunctionRef(Node):
    """Reference to a function by name."""

    function: Function = Field(..., description="The referenced function")

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_function_ref(self)


class NodeList(Node):
    """Ordered, mutable list of nodes rendered as a delimited concatenation.

    Insertion order is rendering order. Emptiness of the list (no items) is
    distinct from emptiness of its rendered text: an item whose own
    ``is_empty()`` is true still counts as an item but is skipped on render.

    Attributes:
        items: Child nodes in rendering order
        delimiter: Text placed between rendered children
    """

    items: List[Node] = Field(default_factory=list, description="Child nodes")
    delimiter: str = Field(default=", ", description="Separator between children")

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_node_list(self)

    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Node]:  # type: ignore[override]
        # yields child nodes, not pydantic (field, value) pairs
        return iter(self.items)

    def __getitem__(self, index: int) -> Node:
        return self.items[index]

    def add(self, converter: "Converter", value: Any) -> int:
        """Convert ``value`` and append it.

        Args:
            converter: The call-site converter used to build the node
            value: Caller input accepted by ``converter``

        Returns:
            Position of the new item, usable with ``replace_at``
        """
        return self.add_node(converter.convert(value))

    def add_all(self, converter: "Converter", values: Iterable[Any]) -> "NodeList":
        """Convert and append each value, preserving order."""
        self.items.extend(converter.convert_all(values))
        return self

    def add_node(self, node: Node) -> int:
        """Append an already-built node and return its position."""
        self.items.append(node)
        return len(self.items) - 1

    def replace_at(self, index: int, node: Node) -> Node:
        """Replace the item at ``index`` in place.

        Returns:
            The node that was replaced
        """
        previous = self.items[index]
        self.items[index] = node
        return previous

    def replace_where(
        self, predicate: Callable[[Node], bool], factory: Callable[[Node], Node]
    ) -> bool:
        """Replace the first item matching ``predicate`` with ``factory(item)``.

        Args:
            predicate: Identifies the item to replace
            factory: Builds the replacement from the current item

        Returns:
            True if an item was replaced, False if none matched
        """
        for index, item in enumerate(self.items):
            if predicate(item):
                self.items[index] = factory(item)
                return True
        return False


class Subquery(Node):
    """A nested statement, rendered inside parentheses."""

    query: Node = Field(..., description="The nested statement")

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_subquery(self)


class CustomNode(Node):
    """Extension point for caller-defined fragments.

    Subclasses implement ``render_custom`` and may override ``collect_custom``
    to report the schema objects they reference.
    """

    def accept(self, visitor: "NodeVisitor[T]") -> T:
        return visitor.visit_custom_node(self)

    @abstractmethod
    def render_custom(self, context: "RenderContext") -> str:
        pass

    def collect_custom(self, vcontext: "ValidationContext") -> None:
        pass


class Statement(Node):
    """Base class for complete SQL statements.

    Statements are built up mutably, may be validated any number of times and
    render without re-validating.
    """

    def validate(self: TStatement) -> TStatement:
        """Check this statement's structural and referential rules.

        The whole tree is walked first; rules are only evaluated against the
        completed reference sets.

        Returns:
            This statement, unchanged

        Raises:
            QueryValidationError: If a rule is violated
        """
        from sql_scaffold.validator.references import ValidationContext

        vcontext = ValidationContext()
        self.collect_references(vcontext)
        vcontext.check_column_tables()
        self.validate_structure(vcontext)
        logger.debug(
            "Validated %s (%d tables, %d columns referenced)",
            type(self).__name__,
            len(vcontext.tables),
            len(vcontext.columns),
        )
        return self

    def validate_structure(self, vcontext: "ValidationContext") -> None:
        """Statement-specific rules, evaluated after the reference walk."""
        pass

    def __str__(self) -> str:
        return self.render()
