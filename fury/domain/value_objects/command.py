"""
Command Value Object

Architectural Intent:
- Describes one program invocation independently of how it is transported
- Carries the caller's byte streams; executors attach them to the process
- Environment names are restricted to shell identifiers because they are
  rendered unquoted in front of the command line
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import BinaryIO, Mapping, Optional, Sequence

_ENV_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Command:
    path: str
    args: Sequence[str] = ()
    env: Mapping[str, str] = field(default_factory=dict)
    stdin: Optional[BinaryIO] = None
    stdout: Optional[BinaryIO] = None
    stderr: Optional[BinaryIO] = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Command path cannot be empty")
        object.__setattr__(self, "args", tuple(self.args))
        for name in self.env:
            if not _ENV_NAME_RE.match(name):
                raise ValueError(f"Invalid environment variable name: {name!r}")

    @classmethod
    def from_argv(cls, *argv: str, **kwargs) -> Command:
        if not argv:
            raise ValueError("argv cannot be empty")
        return cls(path=argv[0], args=argv[1:], **kwargs)

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.path, *self.args)

    def __str__(self) -> str:
        return " ".join(self.argv)
