"""
Error Taxonomy

Architectural Intent:
- One exception family for everything an apply can fail with
- Errors are never retried or converted into another kind
- Stage context is attached by the orchestrator as an exception note
"""

from typing import Optional


class FuryError(Exception):
    """Base class for all provisioning failures."""


class ConflictError(FuryError):
    """Two roles declare the same path with different attributes."""

    def __init__(self, path: str) -> None:
        super().__init__(f"redefinition of path {path!r}")
        self.path = path


class TransportError(FuryError):
    """The remote session could not be established or authenticated."""


class ExecutionError(FuryError):
    """A command exited non-zero or one of its streams failed."""

    def __init__(self, message: str, exit_status: Optional[int] = None) -> None:
        super().__init__(message)
        self.exit_status = exit_status


class StreamingError(FuryError):
    """The file archive could not be encoded or written."""


class HookError(FuryError):
    """A pre-run or post-run hook reported failure."""
