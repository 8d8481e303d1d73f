"""Content filters applied to template sources before embedding."""

from __future__ import annotations

import importlib
import logging
import os
import re
from typing import Callable

from ..core.errors import FilterResolutionError

logger = logging.getLogger(__name__)

FilterFunc = Callable[[str], str]

BUILTIN_FILTERS: dict[str, FilterFunc] = {}

_SCRIPT_CLOSE = re.compile(r"</(script)", re.IGNORECASE)


def builtin(name: str) -> Callable[[FilterFunc], FilterFunc]:
    """Register a function as a named built-in filter."""

    def decorator(func: FilterFunc) -> FilterFunc:
        BUILTIN_FILTERS[name] = func
        return func

    return decorator


@builtin("strip")
def strip(content: str) -> str:
    """Trim surrounding whitespace."""
    return content.strip()


@builtin("collapse-whitespace")
def collapse_whitespace(content: str) -> str:
    """Strip every line and drop the blank ones."""
    return "\n".join(line.strip() for line in content.splitlines() if line.strip())


@builtin("escape-script")
def escape_script(content: str) -> str:
    """Keep embedded content from closing the wrapping script tag."""
    return _SCRIPT_CLOSE.sub(r"<\\/\1", content)


def import_filter(reference: str) -> FilterFunc:
    """Import a filter from a ``package.module:function`` reference.

    Args:
        reference: Dotted module path and attribute name separated by a colon

    Returns:
        The referenced callable
    """
    module_name, _, attr = reference.partition(":")
    if not module_name or not attr:
        raise FilterResolutionError(
            f"Filter reference must be MODULE:FUNCTION, got: {reference!r}"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise FilterResolutionError(
            f"Cannot import filter module {module_name!r}: {e}"
        ) from e

    func = getattr(module, attr, None)
    if func is None or not callable(func):
        raise FilterResolutionError(
            f"Module {module_name!r} has no callable filter {attr!r}"
        )

    logger.debug(f"Imported filter {reference}")
    return func


def resolve_filter(spec: FilterFunc | str) -> FilterFunc:
    """Turn a filter specification into a callable.

    Callables are returned unchanged, names are looked up among the built-in
    filters and anything containing a colon is imported.
    """
    if callable(spec):
        return spec
    if not isinstance(spec, str):
        raise FilterResolutionError(f"Invalid filter: {spec!r}")
    if spec in BUILTIN_FILTERS:
        return BUILTIN_FILTERS[spec]
    if ":" in spec:
        return import_filter(spec)
    raise FilterResolutionError(
        f"Unknown filter {spec!r} (built-in: {', '.join(sorted(BUILTIN_FILTERS))})"
    )


def apply_filter(path: str, content: str, filters: dict[str, FilterFunc]) -> str:
    """Apply the filter registered for the extension of ``path``, if any."""
    ext = os.path.splitext(path)[1]
    func = filters.get(ext)
    if func is None:
        return content
    logger.debug(f"Applying {ext} filter to {path}")
    return func(content)
