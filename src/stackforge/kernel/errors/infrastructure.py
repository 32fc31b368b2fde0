"""Infrastructure errors — I/O failures and degraded dependencies."""

from __future__ import annotations

from typing import Any

from stackforge.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class ArchiveStreamingError(InfrastructureError):
    """Filesystem or compression failure while building an archive."""

    default_code = "archive_streaming_error"

    def __init__(
        self,
        stack_id: str,
        phase: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"stack_id": stack_id, "phase": phase})
        super().__init__(message or f"Failed to build archive for '{stack_id}' during {phase}", **kwargs)
        self.stack_id = stack_id
        self.phase = phase


class DependencyDegradedError(InfrastructureError):
    """A cache or persistent store is unavailable or misbehaving."""

    default_code = "dependency_degraded"

    def __init__(
        self,
        dependency: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Dependency '{dependency}' is degraded", **kwargs)
        self.dependency = dependency


class CircuitOpenError(DependencyDegradedError):
    """Raised when a circuit breaker rejects a call and has no fallback.

    Attributes
    ----------
    circuit_name:
        Name of the circuit breaker that rejected the call.
    """

    default_code = "circuit_open"

    def __init__(self, circuit_name: str, message: str | None = None) -> None:
        super().__init__(circuit_name, message or f"Circuit breaker '{circuit_name}' is OPEN")
        self.circuit_name = circuit_name

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["circuit_name"] = self.circuit_name
        return base


class CallTimeoutError(DependencyDegradedError):
    """A guarded call did not complete before the breaker deadline."""

    default_code = "call_timeout"

    def __init__(self, circuit_name: str, timeout_seconds: float) -> None:
        super().__init__(
            circuit_name,
            f"Call through '{circuit_name}' timed out after {timeout_seconds}s",
        )
        self.circuit_name = circuit_name
        self.timeout_seconds = timeout_seconds


class ConnectionLostError(DependencyDegradedError):
    """A dependency dropped its connection and reconnecting gave up."""

    default_code = "connection_lost"

    def __init__(self, dependency: str, attempts: int | None = None) -> None:
        suffix = f" after {attempts} reconnect attempts" if attempts is not None else ""
        super().__init__(dependency, f"Lost connection to '{dependency}'{suffix}")
        self.attempts = attempts


__all__ = [
    "ArchiveStreamingError",
    "CallTimeoutError",
    "CircuitOpenError",
    "ConnectionLostError",
    "DependencyDegradedError",
    "InfrastructureError",
    "SerializationError",
]
