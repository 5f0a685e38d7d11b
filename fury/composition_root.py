"""
Composition Root

Architectural Intent:
- Single place where the executor and the apply use case are wired
- Chooses the SSH executor when a target host is configured, the local
  executor otherwise
"""

from dataclasses import dataclass
from typing import Optional, TextIO
from fury.application.use_cases.apply_roles import ApplyRoles
from fury.domain.ports.executor_port import ExecutorPort
from fury.domain.value_objects.target import Target
from fury.infrastructure.adapters.fabric_adapter import FabricAdapter
from fury.infrastructure.adapters.local_adapter import LocalAdapter
from fury.infrastructure.config import FuryConfig, load_config


@dataclass
class FuryContainer:
    """DI container holding all wired dependencies."""

    config: FuryConfig
    executor: ExecutorPort
    apply_roles: ApplyRoles


def create_executor(config: FuryConfig) -> ExecutorPort:
    if not config.target.host:
        return LocalAdapter()
    target = Target(
        host=config.target.host, user=config.target.user, port=config.target.port
    )
    return FabricAdapter(target, connect_timeout=config.target.connect_timeout)


def create_container(
    config: Optional[FuryConfig] = None, log: Optional[TextIO] = None
) -> FuryContainer:
    """Create and wire all dependencies."""
    if config is None:
        config = load_config()
    executor = create_executor(config)
    apply_roles = ApplyRoles(
        executor,
        log=log,
        log_output=config.apply.log_output,
        install_command=config.apply.install_command,
        extract_command=config.apply.extract_command,
    )
    return FuryContainer(config=config, executor=executor, apply_roles=apply_roles)
