"""
Fury: provisions a host from declarative roles.

Usage:
    import asyncio
    from fury import File, RoleBuilder, Target, apply
    from fury.infrastructure.adapters.fabric_adapter import FabricAdapter

    caddy = RoleBuilder("caddy")
    caddy.package("ca-certificates")
    caddy.file(File.directory("/etc/caddy"))
    caddy.file(File.regular("/etc/caddy/Caddyfile", "import /etc/caddy/sites.d/*"))

    with FabricAdapter(Target.parse("root@web1")) as ssh:
        asyncio.run(apply(ssh, [caddy.build()]))
"""

from fury.application.dtos.apply_dtos import ApplyReport, ApplyStage
from fury.application.run_context import RunContext
from fury.application.use_cases.apply_roles import ApplyRoles, apply
from fury.domain.entities.role import Hook, Role, RoleBuilder
from fury.domain.errors import (
    ConflictError,
    ExecutionError,
    FuryError,
    HookError,
    StreamingError,
    TransportError,
)
from fury.domain.ports.executor_port import ExecutorPort
from fury.domain.services.role_merger import MergedState, merge_roles
from fury.domain.value_objects.command import Command
from fury.domain.value_objects.file_entry import File
from fury.domain.value_objects.target import Target

__all__ = [
    "ApplyReport",
    "ApplyRoles",
    "ApplyStage",
    "Command",
    "ConflictError",
    "ExecutionError",
    "ExecutorPort",
    "File",
    "FuryError",
    "Hook",
    "HookError",
    "MergedState",
    "Role",
    "RoleBuilder",
    "RunContext",
    "StreamingError",
    "Target",
    "TransportError",
    "apply",
    "merge_roles",
]
