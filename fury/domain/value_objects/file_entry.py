"""
File Entry Value Object

Architectural Intent:
- Immutable description of one filesystem entry to deploy
- Identity is the path; equality is structural over every attribute
- Two roles may declare the same path only if the entries are equal
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class File:
    """
    Value Object representing a file or directory on the target host.
    Contents are ignored for directories.
    """
    path: str
    is_dir: bool = False
    owner: str = "root"
    group: str = "root"
    mode: int = 0o644
    contents: bytes = b""

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not self.path:
            raise ValueError("File path cannot be empty")
        if isinstance(self.contents, str):
            object.__setattr__(self, "contents", self.contents.encode("utf-8"))

    @classmethod
    def directory(
        cls, path: str, owner: str = "root", group: str = "root", mode: int = 0o755
    ) -> File:
        return cls(path=path, is_dir=True, owner=owner, group=group, mode=mode)

    @classmethod
    def regular(
        cls,
        path: str,
        contents: Union[bytes, str] = b"",
        owner: str = "root",
        group: str = "root",
        mode: int = 0o644,
    ) -> File:
        return cls(path=path, owner=owner, group=group, mode=mode, contents=contents)

    def __str__(self) -> str:
        kind = "dir" if self.is_dir else f"{len(self.contents)}B"
        return f"{self.path} ({self.owner}:{self.group} {self.mode:o} {kind})"
