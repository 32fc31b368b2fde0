"""Domain errors — invalid or unavailable stack requests."""

from __future__ import annotations

from typing import Any

from stackforge.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a request violates a domain rule."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class StackRequestError(ValidationError):
    """A user-correctable problem with a requested stack.

    ``error`` is the short headline shown to the client, ``details`` lists
    the valid alternatives. :meth:`to_problem` returns the structured body
    the HTTP boundary sends verbatim.
    """

    default_code = "stack_request_error"
    status_code: int = 400

    def __init__(
        self,
        error: str,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, detail=details, **kwargs)
        self.error = error
        self.details: dict[str, Any] = details or {}
        if status_code is not None:
            self.status_code = status_code

    def to_problem(self) -> dict[str, Any]:
        problem: dict[str, Any] = {
            "statusCode": self.status_code,
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            problem["details"] = self.details
        return problem


class UnsupportedStackError(StackRequestError):
    """Unknown frontend/backend or an incompatible pair."""

    default_code = "unsupported_stack"
    status_code = 400


class StackInDevelopmentError(StackRequestError):
    """The stack is recognised (listed in the UI) but not built yet."""

    default_code = "stack_in_development"
    status_code = 404


class StackNotFoundError(StackRequestError):
    """No template exists, or will exist soon, for the stack."""

    default_code = "stack_not_found"
    status_code = 404


__all__ = [
    "DomainError",
    "StackInDevelopmentError",
    "StackNotFoundError",
    "StackRequestError",
    "UnsupportedStackError",
    "ValidationError",
]
