"""
Command Runner Port

Architectural Intent:
- What role hooks are handed: a way to run commands and write to the log
- Keeps hooks independent of the concrete run context
"""

from abc import ABC, abstractmethod
from fury.domain.value_objects.command import Command


class CommandRunnerPort(ABC):

    @abstractmethod
    async def run_command(self, command: Command) -> None:
        """Runs a fully described command."""
        pass

    @abstractmethod
    async def run(self, *argv: str) -> None:
        """Runs argv with no streams attached."""
        pass

    @abstractmethod
    def log(self, msg: str, *args: object) -> None:
        """Writes one line to the run log."""
        pass
