"""
Role Module

Architectural Intent:
- A Role is a named bundle of desired packages, files and lifecycle hooks
- Roles are immutable once built; the builder is the only mutable stage
- The builder is an explicit value, so several roles can be authored at once

Hooks:
- Async callables receiving the command runner of the current apply
- Returning False (or raising) fails the apply; None or True is success
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Optional
from fury.domain.ports.command_runner_port import CommandRunnerPort
from fury.domain.value_objects.file_entry import File

Hook = Callable[[CommandRunnerPort], Awaitable[Optional[bool]]]


@dataclass(frozen=True)
class Role:
    name: str = ""
    packages: tuple[str, ...] = ()
    files: tuple[File, ...] = ()
    pre_run: Optional[Hook] = None
    post_run: Optional[Hook] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "packages", tuple(self.packages))
        object.__setattr__(self, "files", tuple(self.files))

    def __str__(self) -> str:
        return self.name or "<anonymous role>"


class RoleBuilder:
    """Accumulates a role definition call by call."""

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._packages: list[str] = []
        self._files: list[File] = []
        self._pre_run: Optional[Hook] = None
        self._post_run: Optional[Hook] = None

    def package(self, name: str) -> RoleBuilder:
        self._packages.append(name)
        return self

    def packages(self, *names: str) -> RoleBuilder:
        self._packages.extend(names)
        return self

    def file(self, entry: File) -> RoleBuilder:
        self._files.append(entry)
        return self

    def files(self, entries: Iterable[File]) -> RoleBuilder:
        self._files.extend(entries)
        return self

    def pre_run(self, hook: Hook) -> Hook:
        """Registers the pre-run hook. Usable as a decorator."""
        if self._pre_run is not None:
            raise ValueError(f"Role {self._name!r} already has a pre-run hook")
        self._pre_run = hook
        return hook

    def post_run(self, hook: Hook) -> Hook:
        """Registers the post-run hook. Usable as a decorator."""
        if self._post_run is not None:
            raise ValueError(f"Role {self._name!r} already has a post-run hook")
        self._post_run = hook
        return hook

    def build(self) -> Role:
        return Role(
            name=self._name,
            packages=tuple(self._packages),
            files=tuple(self._files),
            pre_run=self._pre_run,
            post_run=self._post_run,
        )
