"""Archive – template directory walker."""
from __future__ import annotations

import dataclasses
import os
import stat
from pathlib import Path, PurePosixPath

# Dependency caches and version-control metadata never enter an archive.
SKIPPED_DIRECTORIES: frozenset[str] = frozenset(
    {"node_modules", "bower_components", "__pycache__", "venv", "CVS"}
)


@dataclasses.dataclass(frozen=True)
class TemplateEntry:
    """One file or directory to archive, with its in-archive name."""

    path: Path
    arcname: str
    is_dir: bool = False
    mode: int = 0o644


def is_skipped(name: str) -> bool:
    return name.startswith(".") or name in SKIPPED_DIRECTORIES


def walk_template(root: Path, prefix: str) -> list[TemplateEntry]:
    """List *root* recursively as archive entries under *prefix*.

    Entries come out sorted by name, directories before their contents, so
    the same tree always produces the same archive. Symlinks are not
    followed and special files are ignored.
    """
    entries = [TemplateEntry(root, f"{prefix}/", is_dir=True)]
    _walk(root, PurePosixPath(prefix), entries)
    return entries


def _walk(directory: Path, arc_dir: PurePosixPath, out: list[TemplateEntry]) -> None:
    with os.scandir(directory) as it:
        children = sorted(it, key=lambda entry: entry.name)
    for child in children:
        if is_skipped(child.name):
            continue
        arcname = arc_dir / child.name
        if child.is_dir(follow_symlinks=False):
            out.append(TemplateEntry(Path(child.path), f"{arcname}/", is_dir=True))
            _walk(Path(child.path), arcname, out)
        elif child.is_file(follow_symlinks=False):
            mode = stat.S_IMODE(child.stat(follow_symlinks=False).st_mode)
            out.append(TemplateEntry(Path(child.path), str(arcname), mode=mode))


__all__ = ["SKIPPED_DIRECTORIES", "TemplateEntry", "is_skipped", "walk_template"]
