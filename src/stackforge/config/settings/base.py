"""Config settings – Settings base class and the service settings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from stackforge.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings read from ``<PREFIX>_<FIELD>``."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class StackforgeSettings(Settings):
    """Process configuration for the archive service.

    Empty ``redis_url`` runs without a cache; empty ``sentry_dsn`` keeps
    error reporting on the log.
    """

    _prefix: ClassVar[str] = "STACKFORGE"

    templates_root: str = "templates"
    redis_url: str = ""
    mongo_url: str = ""
    archive_cache_ttl_seconds: int = 86_400
    cache_connect_attempts: int = 5
    sentry_dsn: str = ""
    environment: str = "development"
    log_level: str = "INFO"
    json_logs: bool = True

    def _validate(self) -> None:
        if self.archive_cache_ttl_seconds <= 0:
            raise InvalidSettingValueError(
                "archive_cache_ttl_seconds", self.archive_cache_ttl_seconds, "must be positive"
            )
        if self.cache_connect_attempts < 1:
            raise InvalidSettingValueError(
                "cache_connect_attempts", self.cache_connect_attempts, "must be at least 1"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")


__all__ = ["Settings", "StackforgeSettings"]
