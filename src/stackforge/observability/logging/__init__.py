"""Observability – structured logging setup."""
from stackforge.observability.logging.filters import SensitiveFieldsFilter
from stackforge.observability.logging.factory import JsonLoggerFactory

__all__ = ["JsonLoggerFactory", "SensitiveFieldsFilter"]
