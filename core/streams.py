"""
Flow-controlled byte streams shared between the event loop and worker threads.
"""

import threading
from collections import deque
from typing import Any, Optional


class StreamAbortedError(IOError):
    """Raised on either end of a pipe after it has been aborted."""

    pass


class BoundedPipe:
    """
    In-memory pipe with a byte budget.

    The producer side (``write``/``flush``/``close``) blocks while the
    buffered bytes exceed ``max_buffer_size``; the consumer side (``read``)
    blocks until data or end-of-stream is available. Either side may
    ``abort`` the pipe, which wakes and fails the other side.

    The object intentionally has no ``tell``/``seek`` so that writers such
    as ``zipfile.ZipFile`` treat it as an unseekable stream.
    """

    def __init__(self, max_buffer_size: int = 1024 * 1024):
        if max_buffer_size <= 0:
            raise ValueError("max_buffer_size must be positive")
        self.max_buffer_size = max_buffer_size
        self._chunks = deque()
        self._buffered = 0
        self._closed = False
        self._error: Optional[BaseException] = None
        self._cond = threading.Condition()
        self.bytes_written = 0
        self.bytes_read = 0
        self.peak_buffered = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def aborted(self) -> bool:
        return self._error is not None

    @property
    def buffered(self) -> int:
        return self._buffered

    def _raise_if_aborted(self):
        if self._error is not None:
            raise StreamAbortedError(f"Pipe aborted: {self._error}") from self._error

    # Producer side

    def write(self, data) -> int:
        chunk = bytes(data)
        if not chunk:
            return 0

        with self._cond:
            self._raise_if_aborted()
            if self._closed:
                raise ValueError("write to closed pipe")

            # A chunk larger than the budget is accepted once the buffer drains
            while (
                self._buffered > 0
                and self._buffered + len(chunk) > self.max_buffer_size
                and self._error is None
            ):
                self._cond.wait()
            self._raise_if_aborted()

            self._chunks.append(chunk)
            self._buffered += len(chunk)
            self.bytes_written += len(chunk)
            self.peak_buffered = max(self.peak_buffered, self._buffered)
            self._cond.notify_all()

        return len(chunk)

    def flush(self):
        self._raise_if_aborted()

    def close(self):
        """Signal end-of-stream to the consumer."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    # Consumer side

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            parts = []
            while True:
                part = self.read(self.max_buffer_size)
                if not part:
                    return b"".join(parts)
                parts.append(part)

        if size == 0:
            return b""

        with self._cond:
            while not self._chunks and not self._closed and self._error is None:
                self._cond.wait()
            self._raise_if_aborted()

            if not self._chunks:
                return b""

            out = bytearray()
            while self._chunks and len(out) < size:
                chunk = self._chunks.popleft()
                needed = size - len(out)
                if len(chunk) > needed:
                    self._chunks.appendleft(chunk[needed:])
                    chunk = chunk[:needed]
                out += chunk

            self._buffered -= len(out)
            self.bytes_read += len(out)
            self._cond.notify_all()
            return bytes(out)

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    # Both sides

    def abort(self, exc: Optional[BaseException] = None):
        """Fail both ends; buffered data is discarded."""
        with self._cond:
            if self._error is None:
                self._error = exc or StreamAbortedError("pipe aborted")
            self._chunks.clear()
            self._buffered = 0
            self._cond.notify_all()


def close_stream(stream: Any) -> None:
    """Close an SDK response stream and hand its connection back to the pool."""
    if stream is None:
        return
    close = getattr(stream, "close", None)
    if callable(close):
        close()
    release_conn = getattr(stream, "release_conn", None)
    if callable(release_conn):
        release_conn()


def read_all(stream: Any, chunk_size: int = 64 * 1024) -> bytes:
    """Drain a readable stream into memory."""
    parts = []
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        parts.append(chunk)
    return b"".join(parts)
