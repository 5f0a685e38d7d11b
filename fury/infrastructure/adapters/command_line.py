"""
Command Line Construction

Architectural Intent:
- Remote transports execute strings, not argv vectors
- Every token is single-quoted so /bin/sh never expands anything in it:
  file contents, package names and arguments cannot inject commands

Format:
    /bin/sh -c '<KEY='value' ...> '<path>' '<arg>' ...'
"""

from fury.domain.value_objects.command import Command


def shell_escape(value: str) -> str:
    """Quotes value so /bin/sh reads it completely literally."""
    return "'" + value.replace("'", "'\\''") + "'"


def command_string(command: Command) -> str:
    parts = [f"{name}={shell_escape(command.env[name])}" for name in sorted(command.env)]
    parts.append(shell_escape(command.path))
    parts.extend(shell_escape(arg) for arg in command.args)
    return f"/bin/sh -c {shell_escape(' '.join(parts))}"
