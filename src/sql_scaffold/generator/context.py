"""Render context threaded through SQL generation.

A context is immutable. A node that needs different behaviour for its subtree
derives a copy with the relevant flag changed and renders only its own
children with that copy.
"""

from pydantic import BaseModel, ConfigDict, Field


class RenderContext(BaseModel):
    """Positional rendering flags.

    Attributes:
        use_table_aliases: Render table aliases (``t0.col``, ``table t0``)
        quote_identifiers: Quote table and column names
        identifier_quote: Quote character used when quoting is enabled
    """

    model_config = ConfigDict(frozen=True)

    use_table_aliases: bool = Field(default=True, description="Whether table aliases are rendered")
    quote_identifiers: bool = Field(default=False, description="Whether identifiers are quoted")
    identifier_quote: str = Field(default='"', description="Identifier quote character")

    def derive(self, **changes) -> "RenderContext":
        """Return a copy of this context with ``changes`` applied."""
        return self.model_copy(update=changes)

    def quote(self, name: str) -> str:
        """Quote an identifier if quoting is enabled.

        Embedded quote characters are doubled.
        """
        if not self.quote_identifiers:
            return name
        q = self.identifier_quote
        return f"{q}{name.replace(q, q + q)}{q}"

    def quote_path(self, path: str) -> str:
        """Quote each component of a dotted path, e.g. ``schema.table``."""
        return ".".join(self.quote(part) for part in path.split("."))


DEFAULT_CONTEXT = RenderContext()
