"""
Role Merger Service

Architectural Intent:
- Combines any number of roles into one desired state
- Output order depends only on content, never on role order, so that
  install order and archive bytes are reproducible
- A path declared twice must be declared identically
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable
from fury.domain.entities.role import Role
from fury.domain.errors import ConflictError
from fury.domain.value_objects.file_entry import File

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergedState:
    packages: tuple[str, ...] = ()
    files: tuple[File, ...] = ()

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(f.path for f in self.files)

    def as_role(self, name: str = "") -> Role:
        """Returns the merged state as a hookless role, for nested merges."""
        return Role(name=name, packages=self.packages, files=self.files)


def merge_roles(roles: Iterable[Role]) -> MergedState:
    packages: set[str] = set()
    files: dict[str, File] = {}

    for role in roles:
        packages.update(role.packages)
        for entry in role.files:
            existing = files.get(entry.path)
            if existing is None:
                files[entry.path] = entry
            elif existing != entry:
                raise ConflictError(entry.path)

    merged = MergedState(
        packages=tuple(sorted(packages)),
        files=tuple(files[path] for path in sorted(files)),
    )
    logger.debug(
        "Merged %d packages and %d files", len(merged.packages), len(merged.files)
    )
    return merged
