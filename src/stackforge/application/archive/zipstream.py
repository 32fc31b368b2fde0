"""Archive – incremental ZIP writer that hands out compressed chunks.

``zipfile`` writes to any object with ``write``; without ``tell``/``seek``
it switches to streaming mode (data descriptors after each member), so the
archive can be emitted while it is being built.
"""
from __future__ import annotations

import asyncio
import stat
import zipfile
from typing import AsyncIterator, Iterable

from stackforge.application.archive.walker import TemplateEntry

READ_BLOCK_SIZE = 64 * 1024
COMPRESS_LEVEL = 9
# Fixed member timestamp: identical trees give identical archives.
ENTRY_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class _ChunkSink:
    """Write-only target collecting what ``zipfile`` produces."""

    def __init__(self) -> None:
        self._chunks: list[bytes] = []

    def write(self, data: bytes) -> int:
        if data:
            self._chunks.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        pass

    def drain(self) -> bytes:
        data = b"".join(self._chunks)
        self._chunks.clear()
        return data


def _member_info(entry: TemplateEntry, compresslevel: int) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(entry.arcname, date_time=ENTRY_DATE_TIME)
    if entry.is_dir:
        # mkdir() writes the header as-is on some 3.12/3.13 releases
        info.CRC = info.compress_size = info.file_size = 0
        info.external_attr = ((stat.S_IFDIR | 0o755) << 16) | 0x10
        return info
    info.external_attr = (stat.S_IFREG | entry.mode) << 16
    info.compress_type = zipfile.ZIP_DEFLATED
    info._compresslevel = compresslevel  # honoured by ZipFile.open(..., "w")
    return info


class ZipStreamWriter:
    """Deflate *entries* into a ZIP archive, yielding bytes as they are ready.

    File reads and compression run in a worker thread one step at a time,
    keeping the event loop free while the archive is assembled. Errors from
    the filesystem or ``zipfile`` propagate unchanged; the step that failed
    is left in :attr:`phase`. The archive is closed either way; whatever it
    writes after a failure is dropped.
    """

    def __init__(self, compresslevel: int = COMPRESS_LEVEL, block_size: int = READ_BLOCK_SIZE) -> None:
        self._compresslevel = compresslevel
        self._block_size = block_size
        self.phase = "init"

    async def stream(self, entries: Iterable[TemplateEntry]) -> AsyncIterator[bytes]:
        sink = _ChunkSink()
        with zipfile.ZipFile(sink, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:  # type: ignore[arg-type]
            for entry in entries:
                info = _member_info(entry, self._compresslevel)
                if entry.is_dir:
                    self.phase = "directory"
                    archive.mkdir(info)
                else:
                    self.phase = "read"
                    src = await asyncio.to_thread(entry.path.open, "rb")
                    try:
                        with archive.open(info, mode="w") as dest:
                            while block := await asyncio.to_thread(src.read, self._block_size):
                                self.phase = "compress"
                                await asyncio.to_thread(dest.write, block)
                                if chunk := sink.drain():
                                    yield chunk
                                self.phase = "read"
                    finally:
                        src.close()
                if chunk := sink.drain():
                    yield chunk
            self.phase = "finalize"
        if chunk := sink.drain():
            yield chunk
        self.phase = "done"


__all__ = ["COMPRESS_LEVEL", "ENTRY_DATE_TIME", "READ_BLOCK_SIZE", "ZipStreamWriter"]
