"""MongoDB adapter — motor client factory."""

from __future__ import annotations

from typing import Any


def _require_motor() -> Any:
    try:
        import motor.motor_asyncio as motor_async
        return motor_async
    except ImportError as exc:
        raise ImportError("Install 'motor' to use the MongoDB adapter") from exc


def connect_database(url: str, database: str | None = None, **kwargs: Any) -> Any:
    """Return a motor database handle; no I/O happens until the first query."""
    motor_async = _require_motor()
    kwargs.setdefault("serverSelectionTimeoutMS", 5_000)
    client = motor_async.AsyncIOMotorClient(url, **kwargs)
    return client[database] if database else client.get_default_database("stackforge")


__all__ = ["connect_database"]
