"""
Domain Services Package

Architectural Intent:
- Contains domain services implementing provisioning logic
"""

from fury.domain.services.role_merger import MergedState, merge_roles

__all__ = [
    "MergedState",
    "merge_roles",
]
