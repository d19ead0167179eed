"""
Streaming ZIP archive writer.

Entries are read and deflated chunk by chunk straight into the sink, so
neither the sources nor the archive are held in memory. The sink is
treated as unseekable: ``zipfile`` then writes data descriptors after
each entry instead of seeking back to patch local headers.
"""

import asyncio
import zipfile
from typing import Any, BinaryIO, List, Optional, Tuple

from core.logger import logger
from core.streams import close_stream
from ports.storage import ArchiveWriterPort


class ZipArchiveWriter(ArchiveWriterPort):
    """ZIP implementation of ``ArchiveWriterPort``."""

    def __init__(self, compression_level: int = 9, read_chunk_size: int = 64 * 1024):
        self.compression_level = compression_level
        self.read_chunk_size = read_chunk_size
        self._entries: List[Tuple[str, BinaryIO]] = []
        self._sink: Optional[Any] = None
        self._finalized = False
        self.bytes_in = 0

    def append(self, stream: BinaryIO, name: str) -> None:
        if self._finalized:
            raise RuntimeError("archive already finalized")
        if not name:
            raise ValueError("entry name must be a non-empty string")
        self._entries.append((name, stream))

    def pipe(self, sink: Any) -> None:
        if self._sink is not None:
            raise RuntimeError("archive already piped to a sink")
        self._sink = sink

    async def finalize(self) -> int:
        if self._sink is None:
            raise RuntimeError("archive has no sink; call pipe() first")
        if self._finalized:
            raise RuntimeError("archive already finalized")
        self._finalized = True

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._write_archive)

    def _write_archive(self) -> int:
        counter = _CountingSink(self._sink)
        try:
            with zipfile.ZipFile(
                counter,
                mode="w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self.compression_level,
            ) as archive:
                for name, stream in self._entries:
                    self._write_entry(archive, name, stream)
        except BaseException as exc:
            abort = getattr(self._sink, "abort", None)
            if callable(abort):
                abort(exc)
            raise
        finally:
            for _, stream in self._entries:
                close_stream(stream)

        self._sink.close()
        logger.debug(
            f"Archive finalized: {len(self._entries)} entries, "
            f"{self.bytes_in} bytes in, {counter.count} bytes out"
        )
        return counter.count

    def _write_entry(self, archive: zipfile.ZipFile, name: str, stream: BinaryIO):
        # Entry size is unknown up front, so allow ZIP64 sizes
        with archive.open(name, mode="w", force_zip64=True) as entry:
            while True:
                chunk = stream.read(self.read_chunk_size)
                if not chunk:
                    break
                entry.write(chunk)
                self.bytes_in += len(chunk)


class _CountingSink:
    """Write-only proxy counting bytes; hides seek/tell from zipfile."""

    def __init__(self, sink: Any):
        self._sink = sink
        self.count = 0

    def write(self, data) -> int:
        written = self._sink.write(data)
        if written is None:
            written = len(data)
        self.count += written
        return written

    def flush(self):
        flush = getattr(self._sink, "flush", None)
        if callable(flush):
            flush()
