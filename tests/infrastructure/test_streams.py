"""Tests for the stream pumps shared by executors."""

import io
from concurrent.futures import Future
import pytest
from fury.domain.errors import ExecutionError
from fury.domain.value_objects.command import Command
from fury.infrastructure.adapters.streams import CHUNK_SIZE, check_result, drain, feed


class BrokenSink:
    def __init__(self):
        self.writes = 0

    def write(self, data):
        self.writes += 1
        raise OSError("disk full")


def done(error=None) -> Future:
    future = Future()
    if error is None:
        future.set_result(None)
    else:
        future.set_exception(error)
    return future


class TestFeed:
    def test_copies_everything(self):
        payload = b"x" * (CHUNK_SIZE * 3 + 7)
        written = []
        feed(io.BytesIO(payload), written.append)
        assert b"".join(written) == payload
        assert all(len(chunk) <= CHUNK_SIZE for chunk in written)


class TestDrain:
    def test_copies_into_sink(self):
        sink = io.BytesIO()
        drain(io.BytesIO(b"hello world").read, sink)
        assert sink.getvalue() == b"hello world"

    def test_no_sink_discards(self):
        source = io.BytesIO(b"x" * 100000)
        drain(source.read, None)
        assert source.read() == b""

    def test_sink_error_raised_after_reading_to_eof(self):
        source = io.BytesIO(b"x" * (CHUNK_SIZE * 4))
        sink = BrokenSink()
        with pytest.raises(OSError):
            drain(source.read, sink)
        assert source.read() == b""
        assert sink.writes == 1


class TestCheckResult:
    def test_success(self):
        check_result(Command("true"), 0, {"stdout": done(), "stdin": None})

    def test_exit_status_wins(self):
        with pytest.raises(ExecutionError) as exc_info:
            check_result(Command("false"), 1, {"stdout": done(OSError("x"))})
        assert exc_info.value.exit_status == 1

    def test_stream_failure(self):
        with pytest.raises(ExecutionError) as exc_info:
            check_result(Command("cat"), 0, {"stdout": done(OSError("disk full"))})
        assert exc_info.value.exit_status is None
        assert "stdout" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)
