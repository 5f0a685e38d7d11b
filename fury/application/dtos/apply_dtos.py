"""
Apply DTOs

Architectural Intent:
- Stage names and the success report returned at the use case boundary
"""

from dataclasses import dataclass
from enum import Enum


class ApplyStage(Enum):
    PRE_RUN = "pre-run"
    PACKAGES = "packages"
    FILES = "files"
    POST_RUN = "post-run"


@dataclass(frozen=True)
class ApplyReport:
    packages: tuple[str, ...]
    paths: tuple[str, ...]
    stages: tuple[ApplyStage, ...]
    invocations: int
    elapsed_seconds: float
