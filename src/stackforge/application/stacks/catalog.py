"""Stacks – the static catalogue of frontends, backends and templates."""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Mapping

STACK_SEPARATOR = "-"

_COMPATIBILITY: dict[str, tuple[str, ...]] = {
    "react": ("express", "fastify", "nest"),
    "nextjs": ("express", "nest"),
    "vue": ("express", "fastify", "nest"),
    "angular": ("express", "nest"),
    "svelte": ("express", "fastify"),
}

_PRETTY_NAMES: dict[str, str] = {
    "react": "React",
    "nextjs": "Next.js",
    "vue": "Vue.js",
    "angular": "Angular",
    "svelte": "Svelte",
    "express": "Express.js",
    "fastify": "Fastify",
    "nest": "NestJS",
    "django": "Django",
    "laravel": "Laravel",
}


def stack_id(frontend: str, backend: str) -> str:
    return f"{frontend}{STACK_SEPARATOR}{backend}"


def split_stack_id(value: str) -> tuple[str, str]:
    """Split ``"react-express"`` into ``("react", "express")``."""
    frontend, sep, backend = value.partition(STACK_SEPARATOR)
    if not sep or not frontend or not backend:
        raise ValueError(f"Invalid stack identifier {value!r}")
    return frontend, backend


@dataclasses.dataclass(frozen=True)
class StackCatalog:
    """Which stacks exist, which are advertised and which are built.

    ``implemented`` stacks have a template on disk. ``ui_visible`` stacks
    are advertised to clients even while still in development.
    """

    frontends: tuple[str, ...] = ("react", "nextjs", "vue", "angular", "svelte")
    backends: tuple[str, ...] = ("express", "fastify", "nest", "django", "laravel")
    compatibility: Mapping[str, tuple[str, ...]] = dataclasses.field(
        default_factory=lambda: MappingProxyType(dict(_COMPATIBILITY))
    )
    implemented: tuple[str, ...] = ("react-express",)
    ui_visible: tuple[str, ...] = (
        "react-express",
        "react-fastify",
        "vue-express",
        "nextjs-express",
        "angular-express",
    )
    pretty_names: Mapping[str, str] = dataclasses.field(
        default_factory=lambda: MappingProxyType(dict(_PRETTY_NAMES))
    )

    def pretty(self, name: str) -> str:
        return self.pretty_names.get(name, name)

    def pretty_stack(self, value: str) -> str:
        frontend, backend = split_stack_id(value)
        return f"{self.pretty(frontend)} + {self.pretty(backend)}"

    def compatible_backends(self, frontend: str) -> tuple[str, ...]:
        return tuple(self.compatibility.get(frontend, ()))

    def is_compatible(self, frontend: str, backend: str) -> bool:
        return backend in self.compatible_backends(frontend)

    def is_implemented(self, value: str) -> bool:
        return value in self.implemented

    def is_recognized(self, value: str) -> bool:
        """Advertised to clients, whether or not a template exists yet."""
        return value in self.ui_visible or value in self.implemented


DEFAULT_CATALOG = StackCatalog()

__all__ = ["DEFAULT_CATALOG", "STACK_SEPARATOR", "StackCatalog", "split_stack_id", "stack_id"]
