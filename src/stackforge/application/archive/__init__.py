"""Archive – template walking, streaming ZIP assembly and the cached pipeline."""
from stackforge.application.archive.walker import SKIPPED_DIRECTORIES, TemplateEntry, walk_template
from stackforge.application.archive.zipstream import ZipStreamWriter
from stackforge.application.archive.pipeline import (
    ARCHIVE_CACHE_TTL_SECONDS,
    ArchivePipeline,
    ArchiveResponse,
)

__all__ = [
    "ARCHIVE_CACHE_TTL_SECONDS",
    "SKIPPED_DIRECTORIES",
    "ArchivePipeline",
    "ArchiveResponse",
    "TemplateEntry",
    "ZipStreamWriter",
    "walk_template",
]
