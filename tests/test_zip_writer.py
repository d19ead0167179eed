import io
import zipfile

import pytest

from adapters.archive import ZipArchiveWriter
from tests.fakes import TrackingStream


class CollectingSink:
    """Unseekable sink keeping everything written to it."""

    def __init__(self):
        self.buffer = bytearray()
        self.closed = False
        self.aborted_with = None

    def write(self, data):
        self.buffer += data
        return len(data)

    def flush(self):
        pass

    def close(self):
        self.closed = True

    def abort(self, exc=None):
        self.aborted_with = exc


class FailingStream(io.RawIOBase):
    def read(self, size=-1):
        raise ConnectionError("connection reset while reading source")


@pytest.mark.asyncio
async def test_finalize_writes_readable_archive():
    sources = {
        "reports/q1.csv": b"id,total\n1,10\n" * 500,
        "reports/q2.csv": b"id,total\n2,20\n" * 10,
    }
    streams = [TrackingStream(data) for data in sources.values()]
    sink = CollectingSink()

    writer = ZipArchiveWriter(compression_level=9, read_chunk_size=1024)
    for name, stream in zip(sources, streams):
        writer.append(stream, name=name)
    writer.pipe(sink)

    size = await writer.finalize()

    assert size == len(sink.buffer)
    assert sink.closed
    assert writer.bytes_in == sum(len(data) for data in sources.values())
    assert all(stream.closed and stream.released for stream in streams)

    with zipfile.ZipFile(io.BytesIO(bytes(sink.buffer))) as archive:
        assert archive.namelist() == list(sources)
        assert archive.testzip() is None
        for name, data in sources.items():
            assert archive.read(name) == data
            assert archive.getinfo(name).compress_type == zipfile.ZIP_DEFLATED
    # Highly repetitive input must shrink
    assert size < sum(len(data) for data in sources.values())


@pytest.mark.asyncio
async def test_finalize_without_sink_is_rejected():
    writer = ZipArchiveWriter()
    writer.append(TrackingStream(b"x"), name="x.txt")
    with pytest.raises(RuntimeError):
        await writer.finalize()


@pytest.mark.asyncio
async def test_append_after_finalize_is_rejected():
    writer = ZipArchiveWriter()
    writer.pipe(CollectingSink())
    await writer.finalize()
    with pytest.raises(RuntimeError):
        writer.append(TrackingStream(b"x"), name="late.txt")


def test_entry_name_is_required():
    with pytest.raises(ValueError):
        ZipArchiveWriter().append(TrackingStream(b"x"), name="")


@pytest.mark.asyncio
async def test_source_failure_aborts_sink():
    sink = CollectingSink()
    writer = ZipArchiveWriter()
    writer.append(FailingStream(), name="broken.bin")
    writer.pipe(sink)

    with pytest.raises(ConnectionError):
        await writer.finalize()

    assert isinstance(sink.aborted_with, ConnectionError)
    assert not sink.closed
