"""Configuration for the kiwi engine.

Engine settings live in an optional kiwi.yaml:
- extension: default template extension (".kiwi")
- encoding: encoding used to read template files
- concurrent_compile: compile tokens of one template concurrently
- max_include_depth: maximum nesting of {% include %} tags
- processors: names of post-processors applied to every render
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from kiwi.exceptions import ConfigError

CONFIG_FILE_NAME = "kiwi.yaml"
DEFAULT_FILE_EXTENSION = ".kiwi"


class EngineConfig(BaseModel):
    """Engine-wide settings shared by every template of a render."""

    extension: str = Field(
        default=DEFAULT_FILE_EXTENSION,
        description="Extension appended when a bare template name is not found",
    )
    encoding: str = Field(default="utf-8", description="Template file encoding")
    concurrent_compile: bool = Field(
        default=False, description="Compile tokens concurrently (order is kept)"
    )
    max_include_depth: int = Field(
        default=16, ge=1, description="Maximum nesting of include tags"
    )
    processors: list[str] = Field(
        default_factory=list, description="Post-processors applied after rendering"
    )

    @field_validator("extension")
    @classmethod
    def check_extension(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("extension must start with '.' followed by a suffix")
        return value


class TemplateOptions(BaseModel):
    """Per-template options. `path` is the template's resolved location."""

    path: str | None = Field(default=None, description="Resolved source path")
    encoding: str | None = Field(default=None, description="Overrides engine encoding")


def find_config_file(start: Path | None = None) -> Path | None:
    """Find kiwi.yaml in `start` (default: cwd) or its parents."""
    cwd = start or Path.cwd()
    for parent in [cwd] + list(cwd.parents):
        candidate = parent / CONFIG_FILE_NAME
        if candidate.exists():
            return candidate
    return None


def load_engine_yaml(path: Path | None) -> EngineConfig:
    """Load engine settings from `path`.

    A missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    if path is None or not path.exists():
        return EngineConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f) or {}
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Can't decode {path}: {exc.reason}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    try:
        return EngineConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path}: {exc}") from exc
