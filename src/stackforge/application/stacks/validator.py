"""Stacks – frontend/backend combination validator."""
from __future__ import annotations

import dataclasses
from typing import Any

from stackforge.application.stacks.catalog import DEFAULT_CATALOG, StackCatalog
from stackforge.kernel.errors import UnsupportedStackError


@dataclasses.dataclass(frozen=True)
class ValidationIssue:
    """Why a requested stack was refused, with the valid alternatives."""

    error: str
    message: str
    details: dict[str, Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message, "details": self.details}

    def to_exception(self) -> UnsupportedStackError:
        return UnsupportedStackError(self.error, self.message, details=self.details)


class StackValidator:
    """Checks frontend, then backend, then their compatibility.

    The first failing check wins; later checks are not run.
    """

    def __init__(self, catalog: StackCatalog = DEFAULT_CATALOG) -> None:
        self._catalog = catalog

    def validate(self, frontend: str, backend: str) -> ValidationIssue | None:
        catalog = self._catalog

        if frontend not in catalog.frontends:
            choices = ", ".join(catalog.pretty(f) for f in catalog.frontends)
            return ValidationIssue(
                error=f"Unsupported frontend: {frontend}",
                message=f'The frontend "{frontend}" is not supported. Please choose from: {choices}.',
                details={"availableFrontends": list(catalog.frontends)},
            )

        if backend not in catalog.backends:
            choices = ", ".join(catalog.pretty(b) for b in catalog.backends)
            return ValidationIssue(
                error=f"Unsupported backend: {backend}",
                message=f'The backend "{backend}" is not supported. Please choose from: {choices}.',
                details={"availableBackends": list(catalog.backends)},
            )

        if not catalog.is_compatible(frontend, backend):
            compatible = catalog.compatible_backends(frontend)
            recommended = ", ".join(catalog.pretty(b) for b in compatible)
            return ValidationIssue(
                error=f"Incompatible stack combination: {frontend} with {backend}",
                message=(
                    f"{catalog.pretty(frontend)} is not recommended to use with {catalog.pretty(backend)}. "
                    f"For {catalog.pretty(frontend)}, we recommend: {recommended}."
                ),
                details={"compatibleOptions": list(compatible)},
            )

        return None


__all__ = ["StackValidator", "ValidationIssue"]
