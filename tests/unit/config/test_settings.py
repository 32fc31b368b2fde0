"""Unit tests for config settings & validation."""

from dataclasses import dataclass, fields
from typing import ClassVar

import pytest

from stackforge.config import (
    ConfigError,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
    StackforgeSettings,
    load_settings,
)


@dataclass
class WorkerSettings(Settings):
    _prefix: ClassVar[str] = "WORKER"

    queue: str
    concurrency: int = 4
    verbose: bool = False
    ratio: float = 0.5


class TestEnvSettingsLoader:
    def test_loads_and_coerces(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WORKER_QUEUE", "exports")
        monkeypatch.setenv("WORKER_CONCURRENCY", "8")
        monkeypatch.setenv("WORKER_VERBOSE", "yes")
        monkeypatch.setenv("WORKER_RATIO", "0.25")
        settings = EnvSettingsLoader().load(WorkerSettings)
        assert settings == WorkerSettings(queue="exports", concurrency=8, verbose=True, ratio=0.25)

    def test_missing_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("WORKER_QUEUE", raising=False)
        with pytest.raises(MissingRequiredSettingError) as info:
            EnvSettingsLoader().load(WorkerSettings)
        assert info.value.setting_name == "WORKER_QUEUE"

    def test_uncoercible_value(self) -> None:
        loader = EnvSettingsLoader({"WORKER_QUEUE": "q", "WORKER_CONCURRENCY": "many"})
        with pytest.raises(InvalidSettingValueError):
            loader.load(WorkerSettings)

    def test_bad_boolean(self) -> None:
        loader = EnvSettingsLoader({"WORKER_QUEUE": "q", "WORKER_VERBOSE": "maybe"})
        with pytest.raises(InvalidSettingValueError):
            loader.load(WorkerSettings)

    def test_prefix_is_not_a_field(self) -> None:
        assert [f.name for f in fields(WorkerSettings)] == ["queue", "concurrency", "verbose", "ratio"]


class TestStackforgeSettings:
    def test_defaults(self) -> None:
        settings = load_settings({})
        assert settings.archive_cache_ttl_seconds == 86_400
        assert settings.cache_connect_attempts == 5
        assert settings.redis_url == ""
        assert settings.log_level == "INFO"

    def test_reads_prefixed_environment(self) -> None:
        settings = load_settings(
            {
                "STACKFORGE_REDIS_URL": "redis://cache:6379/0",
                "STACKFORGE_TEMPLATES_ROOT": "/srv/templates",
                "STACKFORGE_ARCHIVE_CACHE_TTL_SECONDS": "600",
                "STACKFORGE_JSON_LOGS": "false",
            }
        )
        assert settings.redis_url == "redis://cache:6379/0"
        assert settings.templates_root == "/srv/templates"
        assert settings.archive_cache_ttl_seconds == 600
        assert settings.json_logs is False

    @pytest.mark.parametrize(
        "env",
        [
            {"STACKFORGE_ARCHIVE_CACHE_TTL_SECONDS": "0"},
            {"STACKFORGE_CACHE_CONNECT_ATTEMPTS": "0"},
            {"STACKFORGE_LOG_LEVEL": "chatty"},
        ],
    )
    def test_validation(self, env: dict[str, str]) -> None:
        with pytest.raises(ConfigError):
            load_settings(env)
