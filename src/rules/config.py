from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from errors import LayerCheckError
from graph.model import Layer
from rules.layers import BUILTIN_RULE_NAMES

CONFIG_FILENAME = "layercheck.toml"

UnclassifiedBehavior = Literal["include", "skip"]


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ModuleDef(_StrictModel):
    """A module declared explicitly in the manifest."""

    name: str = Field(min_length=1, description="Unique module name")
    layer: Layer = Field(description="Layer the module belongs to")


class DependencyDef(_StrictModel):
    """A dependency edge declared explicitly in the manifest."""

    from_module: str = Field(alias="from", description="Depending module")
    to_module: str = Field(alias="to", description="Module depended upon")


class LayerDef(_StrictModel):
    """Glob patterns assigning scanned source files to a layer."""

    name: Layer = Field(description="Layer name (e.g., 'Domain', 'Application')")
    globs: list[str] = Field(
        description="Glob patterns for files belonging to this layer"
    )


class ScanConfig(_StrictModel):
    """Configuration for deriving the module graph from Python sources."""

    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all Python files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    layer: list[LayerDef] = Field(
        default_factory=list,
        description="Layer definitions (first match wins)",
    )
    unclassified: UnclassifiedBehavior = Field(
        default="include",
        description="Whether files matching no layer glob become Unclassified modules",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )


class LayerCheckConfig(_StrictModel):
    """Configuration for a layercheck run."""

    enabled_rules: list[str] = Field(
        default_factory=lambda: list(BUILTIN_RULE_NAMES),
        description="Names of the rules to apply (default: all built-in rules)",
    )
    modules: list[ModuleDef] = Field(
        default_factory=list,
        description="Modules declared explicitly",
    )
    dependencies: list[DependencyDef] = Field(
        default_factory=list,
        description="Dependency edges declared explicitly",
    )
    scan: ScanConfig | None = Field(
        default=None,
        description="Derive modules and edges from Python sources under the root",
    )

    @field_validator("enabled_rules", mode="before")
    @classmethod
    def validate_enabled_rules(cls, v: Any) -> Any:
        """Validate that every enabled rule names a built-in rule.

        Note: this runs in `mode="before"` so we can report a clear error
        message using the raw TOML values.
        """

        if v is None:
            return list(BUILTIN_RULE_NAMES)

        if not isinstance(v, list):
            msg = "enabled_rules must be a list of rule names"
            raise TypeError(msg)

        for name in v:
            if name not in BUILTIN_RULE_NAMES:
                msg = (
                    f"Unknown rule '{name}'. "
                    f"Valid rules: {', '.join(BUILTIN_RULE_NAMES)}"
                )
                raise ValueError(msg)

        return v


class ConfigError(LayerCheckError):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path, config_path: Path | None = None) -> LayerCheckConfig:
    """Load configuration from layercheck.toml if it exists.

    An explicit ``config_path`` must exist; the default file under ``root``
    is optional and its absence yields the default configuration.
    """
    if config_path is None:
        config_path = Path(root) / CONFIG_FILENAME
        if not config_path.is_file():
            return LayerCheckConfig()
    elif not config_path.is_file():
        msg = f"Config file does not exist: {config_path}"
        raise ConfigError(msg)

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return LayerCheckConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DependencyDef",
    "LayerCheckConfig",
    "LayerDef",
    "ModuleDef",
    "ScanConfig",
    "load_config",
]
