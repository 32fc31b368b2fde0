"""Stacks – catalogue and validator."""
from stackforge.application.stacks.catalog import (
    DEFAULT_CATALOG,
    StackCatalog,
    split_stack_id,
    stack_id,
)
from stackforge.application.stacks.validator import StackValidator, ValidationIssue

__all__ = [
    "DEFAULT_CATALOG",
    "StackCatalog",
    "StackValidator",
    "ValidationIssue",
    "split_stack_id",
    "stack_id",
]
