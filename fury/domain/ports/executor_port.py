"""
Executor Port

Architectural Intent:
- Port interface for running one command against the target host
- Implemented by adapters (Fabric/SSH, local shell)
- Failures are raised as typed errors, never reported as booleans
"""

from abc import ABC, abstractmethod
from fury.domain.value_objects.command import Command


class ExecutorPort(ABC):
    """
    Port interface for the execution channel.
    """

    @abstractmethod
    async def run(self, command: Command) -> None:
        """
        Runs the command to completion with its streams attached.
        Raises ExecutionError on non-zero exit or stream failure and
        TransportError when the target cannot be reached.
        """
        pass
