"""Configuration management for sql-scaffold.

This module provides a pydantic-based configuration system that loads default
rendering and validation settings from environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sql_scaffold.generator.context import RenderContext


class StrictModeSettings(BaseSettings):
    """Only the strict-mode flag, read on its own.

    Builders consult this when no explicit ``strict`` argument is given, so a
    malformed rendering setting never affects statement construction.
    """

    model_config = SettingsConfigDict(
        env_prefix="SQL_SCAFFOLD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    strict_mode: bool = Field(
        default=False,
        description="Raise ColumnNotFoundError when retargeting a constraint on an unknown column",
    )


class Config(StrictModeSettings):
    """Configuration settings for sql-scaffold.

    This class uses pydantic-settings to automatically load configuration
    from environment variables. All settings can be overridden by setting
    the corresponding environment variable.

    Environment Variables:
        SQL_SCAFFOLD_USE_TABLE_ALIASES: Render table aliases where the grammar allows them
        SQL_SCAFFOLD_QUOTE_IDENTIFIERS: Quote table and column names
        SQL_SCAFFOLD_IDENTIFIER_QUOTE: Quote character for identifiers (default: '"')
        SQL_SCAFFOLD_STRICT_MODE: Raise instead of ignoring constraint retargets
            on columns that were never added

    Example:
        >>> config = Config(quote_identifiers=True)
        >>> config.render_context().quote("order")
        '"order"'
    """

    model_config = SettingsConfigDict(
        env_prefix="SQL_SCAFFOLD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    use_table_aliases: bool = Field(
        default=True,
        description="Render table aliases where the grammar allows them",
    )

    quote_identifiers: bool = Field(
        default=False,
        description="Quote table and column names",
    )

    identifier_quote: str = Field(
        default='"',
        description="Quote character used when quoting identifiers",
    )

    def render_context(self) -> RenderContext:
        """Build the default render context from this configuration.

        Returns:
            A RenderContext carrying the configured flags
        """
        return RenderContext(
            use_table_aliases=self.use_table_aliases,
            quote_identifiers=self.quote_identifiers,
            identifier_quote=self.identifier_quote,
        )

    def __repr__(self) -> str:
        return (
            f"Config("
            f"use_table_aliases={self.use_table_aliases!r}, "
            f"quote_identifiers={self.quote_identifiers!r}, "
            f"identifier_quote={self.identifier_quote!r}, "
            f"strict_mode={self.strict_mode!r}"
            f")"
        )


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        A Config instance with settings loaded from environment.
    """
    return Config()


def load_strict_mode() -> bool:
    """Read only SQL_SCAFFOLD_STRICT_MODE.

    Returns:
        The configured strict-mode flag (False when unset)
    """
    return StrictModeSettings().strict_mode
