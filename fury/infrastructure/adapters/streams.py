"""
Stream Pumps

Architectural Intent:
- Byte copying between caller streams and a running process, shared by
  the SSH and local executors
- Output is always drained to the end, even after the sink fails, so the
  process can never stall on a full output buffer
"""

import logging
from concurrent.futures import Future
from typing import BinaryIO, Callable, Mapping, Optional
from fury.domain.errors import ExecutionError
from fury.domain.value_objects.command import Command

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32 * 1024


def feed(source: BinaryIO, write: Callable[[bytes], object]) -> None:
    """Copies source into write() until source is exhausted."""
    read = getattr(source, "read1", source.read)
    while True:
        data = read(CHUNK_SIZE)
        if not data:
            return
        write(data)


def drain(read: Callable[[int], bytes], sink: Optional[BinaryIO]) -> None:
    """Reads until EOF, copying into sink. Re-raises the first sink error."""
    error: Optional[Exception] = None
    while True:
        data = read(CHUNK_SIZE)
        if not data:
            break
        if sink is None or error is not None:
            continue
        try:
            sink.write(data)
        except (OSError, ValueError) as e:
            logger.debug("Output sink failed, discarding the rest: %s", e)
            error = e
    if error is not None:
        raise error


def check_result(
    command: Command, status: int, pumps: Mapping[str, Optional[Future]]
) -> None:
    """Raises ExecutionError for a non-zero exit, then for a failed pump.

    The exit status wins over stream errors, which are often a consequence
    of the process dying early.
    """
    if status != 0:
        raise ExecutionError(f"{command} exited with status {status}", exit_status=status)
    for name, pump in pumps.items():
        if pump is None:
            continue
        error = pump.exception()
        if error is not None:
            raise ExecutionError(f"{command}: {name} stream failed: {error}") from error
