"""CLI argument parsers and validators."""

from __future__ import annotations

import typer


def parse_filter(value: str) -> tuple[str, str]:
    """Parse a filter argument in format EXT=FILTER."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be EXT=FILTER, got: {value!r}")
    ext, name = value.split("=", 1)
    if not ext.startswith(".") or len(ext) < 2:
        raise typer.BadParameter(f"Extension must start with a dot, got: {ext!r}")
    if not name:
        raise typer.BadParameter(f"Missing filter for extension {ext!r}")
    return ext, name


def select_targets(requested: list[str], available: list[str]) -> list[str]:
    """Return the requested target names, or every target when none is given."""
    if not requested:
        return list(available)
    unknown = [name for name in requested if name not in available]
    if unknown:
        raise typer.BadParameter(
            f"Unknown target(s): {', '.join(unknown)} "
            f"(available: {', '.join(available)})"
        )
    return requested
