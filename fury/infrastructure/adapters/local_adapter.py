"""
Local Adapter

Architectural Intent:
- Infrastructure adapter implementing ExecutorPort on the local machine
- Runs exactly the command line the SSH adapter would send, through the
  local /bin/sh, so quoting behaves identically
- Useful for provisioning the machine Fury runs on, and for exercising the
  full apply pipeline without a remote host
"""

import asyncio
import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor, wait
from typing import BinaryIO
from fury.domain.errors import TransportError
from fury.domain.ports.executor_port import ExecutorPort
from fury.domain.value_objects.command import Command
from fury.infrastructure.adapters.command_line import command_string
from fury.infrastructure.adapters.streams import check_result, drain, feed

logger = logging.getLogger(__name__)


class LocalAdapter(ExecutorPort):
    def __init__(self, shell: str = "/bin/sh") -> None:
        self.shell = shell

    async def run(self, command: Command) -> None:
        await asyncio.get_event_loop().run_in_executor(None, self._run, command)

    def _run(self, command: Command) -> None:
        line = command_string(command)
        logger.debug("Running locally: %s", line)
        try:
            proc = subprocess.Popen(
                [self.shell, "-c", line],
                stdin=subprocess.PIPE if command.stdin is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise TransportError(f"starting {self.shell}: {e}") from e

        stdin = None
        with proc, ThreadPoolExecutor(max_workers=3, thread_name_prefix="fury-local") as pool:
            if command.stdin is not None:
                stdin = pool.submit(self._feed_stdin, proc.stdin, command.stdin)
            stdout = pool.submit(drain, proc.stdout.read1, command.stdout)
            stderr = pool.submit(drain, proc.stderr.read1, command.stderr)
            status = proc.wait()
            wait([stdout, stderr])

        check_result(command, status, {"stdin": stdin, "stdout": stdout, "stderr": stderr})

    @staticmethod
    def _feed_stdin(pipe: BinaryIO, source: BinaryIO) -> None:
        try:
            with pipe:
                feed(source, pipe.write)
        except BrokenPipeError:
            logger.debug("Process stopped reading stdin")
