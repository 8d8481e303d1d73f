"""Domain models for bundling targets, options and task files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..bundling.filters import FilterFunc, resolve_filter
from .errors import ConfigError


def _promote_str(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


class BundleOptions(BaseModel):
    """Options shared by every destination of a target."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base: list[str] = Field(
        default_factory=list, description="Path prefixes (regex) stripped from ids"
    )
    filters: dict[str, FilterFunc] = Field(
        default_factory=dict, description="Content transforms keyed by extension"
    )

    @field_validator("base", mode="before")
    @classmethod
    def _normalize_base(cls, value: Any) -> Any:
        return _promote_str(value)

    @field_validator("base")
    @classmethod
    def _check_base(cls, value: list[str]) -> list[str]:
        for prefix in value:
            try:
                re.compile("^" + prefix)
            except re.error as e:
                raise ValueError(f"Invalid base pattern {prefix!r}: {e}") from e
        return value

    @field_validator("filters", mode="before")
    @classmethod
    def _resolve_filters(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        return {ext: resolve_filter(spec) for ext, spec in value.items()}


class BundleTarget(BaseModel):
    """A destination file and the source patterns bundled into it."""

    destination: Path = Field(..., description="HTML file receiving the cache")
    sources: list[str] = Field(default_factory=list, description="Source patterns")

    @field_validator("sources", mode="before")
    @classmethod
    def _normalize_sources(cls, value: Any) -> Any:
        return _promote_str(value)


class TargetConfig(BaseModel):
    """A named target as declared in the task file."""

    model_config = ConfigDict(extra="forbid")

    files: dict[str, list[str]] = Field(
        ..., min_length=1, description="Destination -> source patterns"
    )
    options: dict[str, Any] = Field(default_factory=dict)

    @field_validator("files", mode="before")
    @classmethod
    def _normalize_files(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {dest: _promote_str(sources) for dest, sources in value.items()}

    @field_validator("options", mode="before")
    @classmethod
    def _default_options(cls, value: Any) -> Any:
        return {} if value is None else value


class TaskFile(BaseModel):
    """Contents of a bundlecache task file."""

    model_config = ConfigDict(extra="forbid")

    options: dict[str, Any] = Field(default_factory=dict)
    targets: dict[str, TargetConfig] = Field(..., min_length=1)

    @field_validator("options", mode="before")
    @classmethod
    def _default_options(cls, value: Any) -> Any:
        return {} if value is None else value

    def options_for(self, name: str) -> BundleOptions:
        """Merge task-level options with those of target ``name``.

        Target keys replace task keys, except ``filters`` which are merged
        extension by extension.
        """
        merged = dict(self.options)
        for key, value in self.targets[name].options.items():
            if key == "filters" and isinstance(value, dict):
                merged["filters"] = {**(merged.get("filters") or {}), **value}
            else:
                merged[key] = value
        try:
            return BundleOptions.model_validate(merged)
        except ValidationError as e:
            raise ConfigError(f"Invalid options for target {name!r}:\n{e}") from e

    def bundle_targets(self, name: str) -> list[BundleTarget]:
        """Return one BundleTarget per destination of target ``name``."""
        return [
            BundleTarget(destination=Path(dest), sources=sources)
            for dest, sources in self.targets[name].files.items()
        ]


class BundleReport(BaseModel):
    """Outcome of bundling a group of targets."""

    updated: list[Path] = Field(default_factory=list)
    failed: list[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed
