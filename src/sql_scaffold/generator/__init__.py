"""SQL generation modules."""

from sql_scaffold.generator.context import DEFAULT_CONTEXT, RenderContext
from sql_scaffold.generator.renderer import SqlRenderVisitor, render_sql

__all__ = ["DEFAULT_CONTEXT", "RenderContext", "SqlRenderVisitor", "render_sql"]
