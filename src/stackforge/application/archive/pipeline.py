"""Archive – ArchivePipeline: validated stack id in, ZIP byte stream out.

Flow for one request::

    catalogue check ─► cache lookaside (stack:<id>)
                          ├─ hit  ─► cached bytes
                          └─ miss ─► resolve template dir ─► walk frontend/ + backend/
                                     ─► deflate ─► stream to client (tee into buffer)
                                     ─► cache fill after the last chunk
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging
from pathlib import Path
from typing import AsyncIterator

from stackforge.application.archive.walker import TemplateEntry, walk_template
from stackforge.application.archive.zipstream import ZipStreamWriter
from stackforge.application.cache.keys import CacheKey
from stackforge.application.stacks.catalog import DEFAULT_CATALOG, StackCatalog, split_stack_id, stack_id
from stackforge.application.stacks.validator import StackValidator
from stackforge.kernel.errors import ArchiveStreamingError, StackInDevelopmentError, StackNotFoundError
from stackforge.observability.metrics import Metrics, NoopMetrics
from stackforge.resilience.cache import ResilientCache

logger = logging.getLogger(__name__)

ARCHIVE_CACHE_TTL_SECONDS = 86_400
TEMPLATE_SECTIONS: tuple[str, ...] = ("frontend", "backend")


@dataclasses.dataclass
class ArchiveResponse:
    """A ready-to-send archive: headers plus a one-shot async byte stream."""

    stack_id: str
    body: AsyncIterator[bytes]
    from_cache: bool = False

    @property
    def filename(self) -> str:
        return f"{self.stack_id}.zip"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/zip",
            "Content-Disposition": f"attachment; filename={self.filename}",
        }

    async def read(self) -> bytes:
        """Consume the whole stream (runs the post-stream cache fill too)."""
        return b"".join([chunk async for chunk in self.body])


async def _single_chunk(data: bytes) -> AsyncIterator[bytes]:
    yield data


class ArchivePipeline:
    """Builds stack archives from disk, or serves them from the cache.

    Parameters
    ----------
    templates_root:
        Directory holding one sub-directory per implemented stack id, each
        with ``frontend/`` and ``backend/`` trees.
    cache:
        Lookaside cache; archives are stored under ``stack:<id>``.
    metrics:
        Receives ``archive.filesystem_walks``, ``archive.cache_hits``,
        ``archive.cache_misses`` and ``archive.cache_writes``.
    """

    def __init__(
        self,
        templates_root: Path | str,
        cache: ResilientCache,
        *,
        catalog: StackCatalog = DEFAULT_CATALOG,
        metrics: Metrics | None = None,
        ttl_seconds: int = ARCHIVE_CACHE_TTL_SECONDS,
    ) -> None:
        self._root = Path(templates_root)
        self._cache = cache
        self._catalog = catalog
        self._validator = StackValidator(catalog)
        self._ttl = ttl_seconds
        metrics = metrics if metrics is not None else NoopMetrics()
        self._walks = metrics.counter("archive.filesystem_walks", "Template trees walked")
        self._hits = metrics.counter("archive.cache_hits", "Archives served from cache")
        self._misses = metrics.counter("archive.cache_misses", "Archives built on demand")
        self._writes = metrics.counter("archive.cache_writes", "Archives stored in cache")

    @property
    def catalog(self) -> StackCatalog:
        return self._catalog

    def resolve(self, stack: str) -> Path:
        """Return the template directory for *stack*.

        Raises :class:`StackInDevelopmentError` for advertised stacks with
        no template yet and :class:`StackNotFoundError` otherwise.
        """
        self.check_available(stack)
        return self._template_dir(stack)

    def check_available(self, stack: str) -> None:
        """Catalogue checks only; the filesystem is not touched."""
        catalog = self._catalog
        try:
            frontend, backend = split_stack_id(stack)
        except ValueError:
            raise StackNotFoundError(
                "Stack not found",
                f"'{stack}' is not a valid stack identifier.",
                details={"availableStacks": list(catalog.ui_visible)},
            ) from None
        pretty = f"{catalog.pretty(frontend)} + {catalog.pretty(backend)}"
        implemented = ", ".join(catalog.pretty_stack(s) for s in catalog.implemented)

        if not catalog.is_implemented(stack):
            if catalog.is_recognized(stack):
                raise StackInDevelopmentError(
                    "Stack in development",
                    f"The {pretty} stack is currently in development. You can see it in the UI, "
                    f"but it's not ready for download yet. Currently implemented: {implemented}.",
                    details={"implementedStacks": list(catalog.implemented), "status": "coming_soon"},
                )
            if catalog.is_compatible(frontend, backend):
                raise StackNotFoundError(
                    "Stack not available yet",
                    f"The {pretty} stack is compatible but not yet available. "
                    f"Currently available: {implemented}.",
                    details={"availableStacks": list(catalog.ui_visible)},
                )
            available = ", ".join(catalog.pretty_stack(s) for s in catalog.ui_visible)
            raise StackNotFoundError(
                "Stack not found",
                f"The {pretty} stack doesn't have a pre-built template yet. "
                f"Currently available templates: {available}.",
                details={"availableStacks": list(catalog.ui_visible)},
            )

    def _template_dir(self, stack: str) -> Path:
        path = self._root / stack
        if not path.is_dir():
            logger.error("archive.template_missing stack=%s path=%s", stack, path)
            raise StackNotFoundError(
                "Stack not found",
                "The requested stack template was not found on the server.",
            )
        return path

    async def generate(self, frontend: str, backend: str) -> ArchiveResponse:
        """Validate the combination, then :meth:`build_or_fetch` it."""
        issue = self._validator.validate(frontend, backend)
        if issue is not None:
            raise issue.to_exception()
        return await self.build_or_fetch(stack_id(frontend, backend))

    async def build_or_fetch(self, stack: str) -> ArchiveResponse:
        """Serve *stack* from the cache, or build it from its template.

        A cached archive is served even when its template directory has
        since disappeared from disk.
        """
        self.check_available(stack)
        key = CacheKey.for_stack(stack)

        cached = await self._cache.get_bytes(key)
        if cached is not None:
            logger.info("archive.cache_hit stack=%s bytes=%d", stack, len(cached))
            self._hits.add(1, {"stack": stack})
            return ArchiveResponse(stack, _single_chunk(cached), from_cache=True)

        root = self._template_dir(stack)
        logger.info("archive.cache_miss stack=%s", stack)
        self._misses.add(1, {"stack": stack})
        return ArchiveResponse(stack, self._build(stack, root, key))

    async def _build(self, stack: str, root: Path, key: str) -> AsyncIterator[bytes]:
        buffer: list[bytes] | None = [] if self._cache.is_available() else None
        writer = ZipStreamWriter()
        size = 0
        try:
            self._walks.add(1, {"stack": stack})
            entries = await asyncio.to_thread(self._collect, root)
            async for chunk in writer.stream(entries):
                size += len(chunk)
                if buffer is not None:
                    buffer.append(chunk)
                yield chunk
        except Exception as exc:
            phase = "walk" if writer.phase == "init" else writer.phase
            logger.error("archive.stream_failed stack=%s phase=%s error=%r", stack, phase, exc)
            raise ArchiveStreamingError(stack, phase, cause=exc) from exc

        logger.info("archive.built stack=%s bytes=%d", stack, size)
        if buffer:
            await self._fill_cache(stack, key, b"".join(buffer))

    def _collect(self, root: Path) -> list[TemplateEntry]:
        entries: list[TemplateEntry] = []
        for section in TEMPLATE_SECTIONS:
            section_root = root / section
            if not section_root.is_dir():
                logger.warning("archive.section_missing path=%s", section_root)
                continue
            entries.extend(walk_template(section_root, section))
        return entries

    async def _fill_cache(self, stack: str, key: str, data: bytes) -> None:
        try:
            await self._cache.set(key, data, self._ttl)
        except Exception as exc:  # noqa: BLE001 – the response is already sent
            logger.error("archive.cache_write_failed stack=%s error=%r", stack, exc)
            return
        self._writes.add(1, {"stack": stack})
        logger.info("archive.cached stack=%s bytes=%d ttl=%d", stack, len(data), self._ttl)


__all__ = ["ARCHIVE_CACHE_TTL_SECONDS", "TEMPLATE_SECTIONS", "ArchivePipeline", "ArchiveResponse"]
