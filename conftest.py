"""Global test configuration.

Provides an in-memory executor that records commands, consumes stdin and
plays back canned output, so use cases can be tested without a host.
"""

import asyncio
import io
from typing import Optional

import pytest

from fury.domain.ports.executor_port import ExecutorPort
from fury.domain.value_objects.command import Command


class RecordingExecutor(ExecutorPort):
    def __init__(
        self,
        outputs: Optional[dict[str, tuple[bytes, bytes]]] = None,
        failures: Optional[dict[str, Exception]] = None,
    ) -> None:
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.commands: list[Command] = []
        self.stdin_data: list[bytes] = []

    @property
    def argvs(self) -> list[tuple[str, ...]]:
        return [c.argv for c in self.commands]

    async def run(self, command: Command) -> None:
        self.commands.append(command)
        stdout, stderr = self.outputs.get(command.path, (b"", b""))
        failure = self.failures.get(command.path)
        if failure is None and command.stdin is not None:
            data = await asyncio.get_event_loop().run_in_executor(
                None, command.stdin.read
            )
            self.stdin_data.append(data)
        if stdout and command.stdout is not None:
            command.stdout.write(stdout)
        if stderr and command.stderr is not None:
            command.stderr.write(stderr)
        if failure is not None:
            raise failure


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def run_log():
    return io.StringIO()
