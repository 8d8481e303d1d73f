"""Bundlecache - AngularJS template cache bundler.

Embeds template files into an HTML page as ``text/ng-template`` script tags.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .bundling.engine import bundle, bundle_all
from .cli import main
from .core.errors import (
    BundleCacheError,
    InvalidDestinationError,
    MissingInsertionPointError,
)
from .core.models import BundleOptions, BundleTarget

__all__ = [
    "BundleCacheError",
    "BundleOptions",
    "BundleTarget",
    "InvalidDestinationError",
    "MissingInsertionPointError",
    "bundle",
    "bundle_all",
    "main",
]
