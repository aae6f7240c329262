"""Configuration management for Chronos."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from chronos.exceptions import ConfigError

CHRONOS_DIR = ".chronos"
CONFIG_FILE = "config.json"

DEFAULT_MAX_TOKENS = 90000


class ContextSettings(BaseModel):
    """Smart context selection settings."""

    causal_chain_depth: int = Field(default=2, ge=0)  # 1-3 hops typical
    character_history_depth: int = Field(default=5, ge=0)  # reserved for callers
    include_scientific_concepts: bool = True
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, ge=0)


class ProjectConfig(BaseModel):
    """Full project configuration."""

    name: str = ""
    context: ContextSettings = Field(default_factory=ContextSettings)


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from `start` looking for a .chronos directory."""
    current = (start or Path.cwd()).resolve()
    while current != current.parent:
        if (current / CHRONOS_DIR).is_dir():
            return current
        current = current.parent
    if (current / CHRONOS_DIR).is_dir():
        return current
    return None


def get_chronos_dir(root: Path) -> Path:
    """Get the .chronos directory for a project root."""
    return root / CHRONOS_DIR


def load_config(root: Path) -> ProjectConfig:
    """Load configuration from .chronos/config.json."""
    config_path = get_chronos_dir(root) / CONFIG_FILE
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
            return ProjectConfig(**data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid config at {config_path}: {e}") from e
    return ProjectConfig(name=root.name)


def save_config(root: Path, config: ProjectConfig) -> None:
    """Save configuration to .chronos/config.json."""
    cs_dir = get_chronos_dir(root)
    cs_dir.mkdir(parents=True, exist_ok=True)
    config_path = cs_dir / CONFIG_FILE
    config_path.write_text(json.dumps(config.model_dump(), indent=2))


def get_config_value(config: ProjectConfig, key: str) -> Any:
    """Read a nested config value using dot notation (e.g., 'context.max_tokens')."""
    target: Any = config.model_dump()
    for part in key.split("."):
        if not isinstance(target, dict) or part not in target:
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    return target


def set_config_value(config: ProjectConfig, key: str, value: Any) -> ProjectConfig:
    """Set a nested config value using dot notation (e.g., 'context.max_tokens')."""
    parts = key.split(".")
    data = config.model_dump()
    target = data
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            raise KeyError(f"Invalid config key: {key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Invalid config key: {key}")
    target[parts[-1]] = value
    try:
        return ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from e
