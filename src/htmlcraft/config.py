"""Configuration parsing for htmlcraft.yaml

- search_path: directories added to the import path before loading renderables
- context: shared context merged under every target
- targets: named render targets
  - renderable: "package.module:attribute" reference
  - context_file: YAML/JSON file with the target's context
  - context: inline context (wins over context_file)
  - output: file to write, stdout when omitted
  - safe: disable escaping for the whole target
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, PrivateAttr, ValidationError

from htmlcraft.exceptions import ConfigError

CONFIG_FILENAME = "htmlcraft.yaml"


class TargetConfig(BaseModel):
    """A single render target."""

    renderable: str = Field(description="Renderable reference, e.g. 'site.pages:index'")
    context: dict[str, Any] = Field(default_factory=dict, description="Inline context")
    context_file: str | None = Field(default=None, description="YAML/JSON context file")
    output: str | None = Field(default=None, description="Output file, stdout if omitted")
    safe: bool = Field(default=False, description="Disable escaping")


class HtmlcraftConfig(BaseModel):
    """Full htmlcraft.yaml configuration"""

    search_path: list[str] = Field(default_factory=list)
    context: dict[str, Any] = Field(default_factory=dict)
    targets: dict[str, TargetConfig] = Field(default_factory=dict)

    _base_dir: Path = PrivateAttr(default_factory=Path.cwd)

    @classmethod
    def load(cls, path: Path) -> "HtmlcraftConfig":
        """Load config from yaml file; a missing file gives an empty config."""
        if not path.exists():
            config = cls()
        else:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
            try:
                config = cls.model_validate(data)
            except ValidationError as e:
                raise ConfigError(f"Invalid config file {path}: {e}") from e

        config._base_dir = path.parent.resolve()
        return config

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def resolve_path(self, path: str | Path) -> Path:
        """Resolve a path relative to the config file's directory."""
        p = Path(path)
        if p.is_absolute():
            return p
        return self._base_dir / p

    def get_target(self, name: str) -> TargetConfig:
        """Get target config by name."""
        target = self.targets.get(name)
        if target is None:
            available = ", ".join(sorted(self.targets)) or "none"
            raise ConfigError(f"Unknown target '{name}' (available: {available})")
        return target

    def target_context(self, target: TargetConfig) -> dict[str, Any]:
        """Shared context, then the context file, then the inline context."""
        context = dict(self.context)
        if target.context_file:
            context.update(load_context_file(self.resolve_path(target.context_file)))
        context.update(target.context)
        return context


def load_context_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON context file; the top level must be a mapping."""
    if not path.exists():
        raise ConfigError(f"Context file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse context file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Context file {path} must contain a mapping")
    return data


def parse_assignments(assignments: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` pairs; values are read as YAML scalars (``3`` -> 3, ``yes`` -> True)."""
    result: dict[str, Any] = {}
    for item in assignments:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise ConfigError(f"Expected key=value, got {item!r}")
        result[key.strip()] = yaml.safe_load(raw) if raw else ""
    return result


def find_config(start: Path | None = None) -> Path | None:
    """Find htmlcraft.yaml in the given directory or its parents."""
    cwd = start or Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.exists():
            return candidate
    return None
