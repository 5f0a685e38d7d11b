"""
Run Context

Architectural Intent:
- Wraps the executor for the duration of one apply
- Numbers every command invocation and, while output logging is on, tees
  its stdout and stderr into the run log, one correlated record per line,
  while still handing the bytes to the caller's own sinks
- Counter and log sink are the only state shared between threads; both sit
  behind one lock that is never held across blocking I/O on a pipe

Log record format:
    <     3> <stderr> E: Unable to locate package foo
"""

import asyncio
import logging
import os
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import BinaryIO, Optional, TextIO
from fury.domain.ports.command_runner_port import CommandRunnerPort
from fury.domain.ports.executor_port import ExecutorPort
from fury.domain.value_objects.command import Command

logger = logging.getLogger(__name__)


class _TeeWriter:
    """Duplicates writes into a scanner pipe and the caller's sink.

    A broken scanner pipe is dropped; the caller's sink keeps receiving.
    """

    def __init__(self, pipe: BinaryIO, sink: Optional[BinaryIO]) -> None:
        self._pipe: Optional[BinaryIO] = pipe
        self._sink = sink

    def write(self, data: bytes) -> int:
        if self._pipe is not None:
            try:
                self._pipe.write(data)
                self._pipe.flush()
            except (OSError, ValueError) as e:
                logger.warning("Output scanner went away: %s", e)
                self._pipe = None
        if self._sink is not None:
            self._sink.write(data)
        return len(data)

    def flush(self) -> None:
        if self._sink is not None:
            self._sink.flush()

    def close(self) -> None:
        """Closes the pipe end only; the caller owns its sink."""
        if self._pipe is not None:
            try:
                self._pipe.close()
            except OSError as e:
                logger.debug("Closing scanner pipe: %s", e)
            self._pipe = None


def _open_pipe() -> tuple[BinaryIO, BinaryIO]:
    read_fd, write_fd = os.pipe()
    return open(read_fd, "rb"), open(write_fd, "wb")


def _strip_eol(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


class RunContext(CommandRunnerPort):
    def __init__(
        self,
        executor: ExecutorPort,
        log: Optional[TextIO] = None,
        log_output: bool = True,
    ) -> None:
        self.executor = executor
        self._log = log if log is not None else sys.stdout
        self._log_output = log_output
        self._lock = threading.Lock()
        self._run_num = 0

    @property
    def log_output(self) -> bool:
        return self._log_output

    def set_log_output(self, enabled: bool) -> None:
        self._log_output = enabled

    @property
    def invocations(self) -> int:
        """Number of invocations that have been logged so far."""
        with self._lock:
            return self._run_num

    def log(self, msg: str, *args: object) -> None:
        line = (msg % args if args else msg) + "\n"
        with self._lock:
            self._log.write(line)
            self._log.flush()

    def _next_run_num(self) -> int:
        with self._lock:
            run_num = self._run_num
            self._run_num += 1
            return run_num

    async def run(self, *argv: str) -> None:
        await self.run_command(Command.from_argv(*argv))

    async def run_command(self, command: Command) -> None:
        if not self._log_output:
            await self.executor.run(command)
            return

        run_num = self._next_run_num()
        logger.debug("Invocation %d: %s", run_num, command, extra={"run": run_num})

        out_reader, out_writer = _open_pipe()
        err_reader, err_writer = _open_pipe()
        stdout = _TeeWriter(out_writer, command.stdout)
        stderr = _TeeWriter(err_writer, command.stderr)

        loop = asyncio.get_event_loop()
        pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix=f"fury-run-{run_num}")
        scanners = [
            loop.run_in_executor(pool, self._scan, out_reader, run_num, "stdout"),
            loop.run_in_executor(pool, self._scan, err_reader, run_num, "stderr"),
        ]
        try:
            await self.executor.run(replace(command, stdout=stdout, stderr=stderr))
        finally:
            stdout.close()
            stderr.close()
            try:
                results = await asyncio.gather(*scanners, return_exceptions=True)
            finally:
                pool.shutdown()
            for kind, result in zip(("stdout", "stderr"), results):
                if isinstance(result, Exception):
                    logger.warning(
                        "Invocation %d: %s scanner failed: %s",
                        run_num, kind, result, extra={"run": run_num},
                    )

    def _scan(self, reader: BinaryIO, run_num: int, kind: str) -> None:
        try:
            with reader:
                for raw in reader:
                    text = _strip_eol(raw).decode("utf-8", "replace")
                    self.log("<%6d> <%s> %s", run_num, kind, text)
        except OSError as e:
            self.log("<%6d> <%s> Error while reading %s: %s", run_num, kind, kind, e)
