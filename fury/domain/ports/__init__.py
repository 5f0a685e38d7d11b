"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
"""

from fury.domain.ports.executor_port import ExecutorPort
from fury.domain.ports.command_runner_port import CommandRunnerPort

__all__ = [
    "ExecutorPort",
    "CommandRunnerPort",
]
