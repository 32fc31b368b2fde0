"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                  (domain.py)
    │   └── ValidationError
    │       └── StackRequestError
    │           ├── UnsupportedStackError
    │           ├── StackInDevelopmentError
    │           └── StackNotFoundError
    ├── ApplicationError             (application.py)
    └── InfrastructureError          (infrastructure.py)
        ├── SerializationError
        ├── ArchiveStreamingError
        └── DependencyDegradedError
            ├── CircuitOpenError
            └── CallTimeoutError
"""

from stackforge.kernel.errors.application import ApplicationError
from stackforge.kernel.errors.base import BaseError
from stackforge.kernel.errors.domain import (
    DomainError,
    StackInDevelopmentError,
    StackNotFoundError,
    StackRequestError,
    UnsupportedStackError,
    ValidationError,
)
from stackforge.kernel.errors.infrastructure import (
    ArchiveStreamingError,
    CallTimeoutError,
    CircuitOpenError,
    ConnectionLostError,
    DependencyDegradedError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
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
