"""Validation of query trees."""

from sql_scaffold.validator.references import ReferenceCollector, ValidationContext

__all__ = ["ReferenceCollector", "ValidationContext"]
