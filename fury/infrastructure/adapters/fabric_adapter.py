"""
Fabric Adapter

Architectural Intent:
- Infrastructure adapter implementing ExecutorPort via Fabric/SSH
- One connection per target, one SSH session channel per command
- Streams are pumped on a small thread pool so stdin can be fed while
  stdout and stderr are drained

Security:
- Authentication is delegated to the SSH agent; no key files are read
- Commands are sent as fully quoted /bin/sh command lines
"""

import asyncio
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import BinaryIO, Optional
from fabric import Connection
from paramiko import Channel
from paramiko.ssh_exception import SSHException
from fury.domain.errors import TransportError
from fury.domain.ports.executor_port import ExecutorPort
from fury.domain.value_objects.command import Command
from fury.domain.value_objects.target import Target
from fury.infrastructure.adapters.command_line import command_string
from fury.infrastructure.adapters.streams import check_result, drain, feed

logger = logging.getLogger(__name__)


class FabricAdapter(ExecutorPort):
    """Adapter implementing ExecutorPort over an SSH connection."""

    def __init__(self, target: Target, connect_timeout: int = 30) -> None:
        self.target = target
        self.connect_timeout = connect_timeout
        self._connection: Optional[Connection] = None
        self._lock = threading.Lock()

    def _get_connection(self) -> Connection:
        with self._lock:
            if self._connection is not None:
                return self._connection
            if not os.environ.get("SSH_AUTH_SOCK"):
                raise TransportError("no SSH agent found, SSH_AUTH_SOCK not defined")
            connection = Connection(
                host=self.target.host,
                user=self.target.user,
                port=self.target.port,
                connect_timeout=self.connect_timeout,
                connect_kwargs={
                    "allow_agent": True,
                    "look_for_keys": False,
                },
            )
            try:
                connection.open()
            except (SSHException, OSError) as e:
                raise TransportError(f"connecting to {self.target}: {e}") from e
            logger.info("Connected to %s", self.target)
            self._connection = connection
            return connection

    async def run(self, command: Command) -> None:
        await asyncio.get_event_loop().run_in_executor(None, self._run, command)

    def _run(self, command: Command) -> None:
        line = command_string(command)
        connection = self._get_connection()
        try:
            channel = connection.create_session()
            channel.exec_command(line)
        except (SSHException, OSError) as e:
            raise TransportError(f"opening session on {self.target}: {e}") from e
        logger.debug("Running on %s: %s", self.target, line)

        stdin = None
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="fury-ssh") as pool:
            try:
                if command.stdin is not None:
                    stdin = pool.submit(self._feed_stdin, channel, command.stdin)
                else:
                    channel.shutdown_write()
                stdout = pool.submit(drain, channel.recv, command.stdout)
                stderr = pool.submit(drain, channel.recv_stderr, command.stderr)
                status = channel.recv_exit_status()
                wait([stdout, stderr])
            finally:
                channel.close()

        check_result(command, status, {"stdin": stdin, "stdout": stdout, "stderr": stderr})

    @staticmethod
    def _feed_stdin(channel: Channel, source: BinaryIO) -> None:
        try:
            feed(source, channel.sendall)
            channel.shutdown_write()
        except OSError:
            if channel.closed or channel.exit_status_ready():
                logger.debug("Remote command stopped reading stdin")
                return
            raise

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def __enter__(self) -> "FabricAdapter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
