"""Source pattern expansion and template identifiers."""

from __future__ import annotations

import glob
import logging
import re
from pathlib import Path
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)


def normalize_patterns(sources: str | Sequence[str] | None) -> list[str]:
    """Promote a single pattern to a list."""
    if sources is None:
        return []
    if isinstance(sources, str):
        return [sources]
    return list(sources)


def expand_patterns(patterns: Iterable[str], cwd: Path | None = None) -> list[str]:
    """Expand glob patterns and concatenate the matches in pattern order.

    Relative patterns are matched below ``cwd`` and yield relative paths.
    Matches found by several patterns are kept once per pattern.

    Args:
        patterns: Glob patterns, ``**`` matches across directories
        cwd: Directory relative patterns are resolved against

    Returns:
        Matched paths as strings
    """
    root_dir = str(cwd) if cwd is not None else None
    matches: list[str] = []
    for pattern in patterns:
        found = glob.glob(pattern, root_dir=root_dir, recursive=True)
        logger.debug(f"Pattern {pattern!r} matched {len(found)} path(s)")
        matches.extend(found)
    return matches


def existing_files(paths: Iterable[str], cwd: Path | None = None) -> list[str]:
    """Keep the paths that are regular files right now."""
    kept: list[str] = []
    for path in paths:
        full = Path(path) if cwd is None else Path(cwd) / path
        if full.is_file():
            kept.append(path)
        else:
            logger.debug(f"Skipping {path}: no longer a file")
    return kept


def compile_base(base: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile base prefixes, anchored at the start of the path."""
    return [re.compile("^" + prefix) for prefix in base]


def strip_base(path: str, prefixes: Iterable[re.Pattern[str]]) -> str:
    """Remove every matching prefix from ``path``, one after the other."""
    identifier = path
    for prefix in prefixes:
        identifier = prefix.sub("", identifier, count=1)
    return identifier
