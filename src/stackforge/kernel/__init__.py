"""Kernel – framework-agnostic building blocks (errors, result type, clock)."""

from stackforge.kernel.errors import (
    ArchiveStreamingError,
    BaseError,
    CallTimeoutError,
    CircuitOpenError,
    ConnectionLostError,
    DependencyDegradedError,
    DomainError,
    InfrastructureError,
    SerializationError,
    StackInDevelopmentError,
    StackNotFoundError,
    StackRequestError,
    UnsupportedStackError,
    ValidationError,
)

__all__ = [
    "ArchiveStreamingError",
    "BaseError",
    "CallTimeoutError",
    "CircuitOpenError",
    "ConnectionLostError",
    "DependencyDegradedError",
    "DomainError",
    "InfrastructureError",
    "SerializationError",
    "StackInDevelopmentError",
    "StackNotFoundError",
    "StackRequestError",
    "UnsupportedStackError",
    "ValidationError",
]
