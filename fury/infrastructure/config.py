"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Environment variables override file-based config
- Falls back to defaults when the config file is absent

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- An empty target host means "provision this machine"
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetConfig:
    """Host being provisioned."""
    host: str = ""
    user: str = "root"
    port: int = 22
    connect_timeout: int = 30


@dataclass(frozen=True)
class ApplyConfig:
    """Apply behaviour."""
    log_output: bool = True
    install_command: tuple[str, ...] = ("apt-get", "-y", "install")
    extract_command: tuple[str, ...] = ("tar", "-z", "-x", "-v", "-f-", "-P", "-C/")


@dataclass(frozen=True)
class FuryConfig:
    """Root configuration."""
    target: TargetConfig = field(default_factory=TargetConfig)
    apply: ApplyConfig = field(default_factory=ApplyConfig)
    log_level: str = "WARNING"
    log_json: bool = False


def _to_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _env_override(data: dict, prefix: str = "FURY") -> dict:
    """Override config values with environment variables.

    Variables follow the pattern FURY_SECTION_KEY, for example
    FURY_TARGET_HOST=web1 or FURY_APPLY_LOG_OUTPUT=false. Top-level keys
    are matched whole: FURY_LOG_LEVEL=DEBUG.
    """
    top_level = {f.name for f in fields(FuryConfig)}
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in top_level:
            data[name] = value
            continue
        section, _, field_name = name.partition("_")
        if field_name:
            data.setdefault(section, {})[field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name: f for f in fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    for name, value in filtered.items():
        kind = valid_fields[name].type
        if kind == "tuple[str, ...]":
            if isinstance(value, str):
                filtered[name] = tuple(v.strip() for v in value.split(",") if v.strip())
            elif isinstance(value, list):
                filtered[name] = tuple(value)
        elif isinstance(value, str):
            if kind == "int":
                filtered[name] = int(value)
            elif kind == "bool":
                filtered[name] = _to_bool(value)

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "FURY",
) -> FuryConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (FURY_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to fury.json in CWD.
        env_prefix: Environment variable prefix. Defaults to FURY.
    """
    config_path = Path(path) if path else Path("fury.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    log_json = data.get("log_json", False)
    if isinstance(log_json, str):
        log_json = _to_bool(log_json)

    return FuryConfig(
        target=_build_sub_config(TargetConfig, data.get("target", {})),
        apply=_build_sub_config(ApplyConfig, data.get("apply", {})),
        log_level=data.get("log_level", "WARNING"),
        log_json=log_json,
    )
