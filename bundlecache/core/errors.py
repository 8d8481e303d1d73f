"""Exceptions raised while bundling templates into a destination file."""

from __future__ import annotations

from pathlib import Path


class BundleCacheError(Exception):
    """Base class for all bundlecache failures."""


class InvalidDestinationError(BundleCacheError):
    """Raised when the destination does not exist or is not a regular file."""

    def __init__(self, destination: Path) -> None:
        super().__init__(
            f"Destination path {destination} does not exist or is not a File."
        )
        self.destination = destination


class MissingInsertionPointError(BundleCacheError):
    """Raised when the destination has no closing body tag to insert before."""

    def __init__(self, destination: Path, marker: str) -> None:
        super().__init__(f"Destination {destination} has no {marker} marker.")
        self.destination = destination
        self.marker = marker


class FilterResolutionError(BundleCacheError):
    """Raised when a filter name or reference cannot be resolved."""


class ConfigError(BundleCacheError):
    """Raised when the task file is missing or invalid."""
