"""Template cache bundling engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from jinja2 import Environment, StrictUndefined, Template

from ..core.errors import (
    BundleCacheError,
    InvalidDestinationError,
    MissingInsertionPointError,
)
from ..core.models import BundleOptions, BundleReport, BundleTarget
from . import sources as src
from .filters import apply_filter
from .io import atomic_write_text, file_mode, read_text

logger = logging.getLogger(__name__)

INSERTION_MARKER = "</body>"

TAG_MARKUP = (
    '<script type="text/ng-template" id="{{ identifier }}">\n'
    "{{ content }}\n"
    "</script>"
)


def _tag_template() -> Template:
    env = Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )
    return env.from_string(TAG_MARKUP)


_TAG_TEMPLATE = _tag_template()


def render_tag(identifier: str, content: str) -> str:
    """Wrap template content in an ng-template script tag."""
    return _TAG_TEMPLATE.render(identifier=identifier, content=content)


def resolve_destination(destination: Path, cwd: Path | None = None) -> Path:
    """Resolve the destination and make sure it is a regular file.

    Symbolic links are refused since the rewrite would replace the link.

    Raises:
        InvalidDestinationError: if the path is missing or not a regular file
    """
    if cwd is not None and not destination.is_absolute():
        destination = cwd / destination
    destination = Path(destination).absolute()
    if destination.is_symlink() or not destination.is_file():
        raise InvalidDestinationError(destination)
    return destination


def build_tags(
    paths: Iterable[str],
    options: BundleOptions,
    cwd: Path | None = None,
    encoding: str = "utf-8",
) -> list[str]:
    """Read each file and render its script tag.

    Args:
        paths: Source files, in output order
        options: Base prefixes and filters
        cwd: Directory relative paths are read from
        encoding: Source file encoding

    Returns:
        One tag block per file
    """
    prefixes = src.compile_base(options.base)
    tags = []
    for path in paths:
        identifier = src.strip_base(path, prefixes)
        full = Path(path) if cwd is None else cwd / path
        content = apply_filter(path, read_text(full, encoding), options.filters)
        logger.debug(f"Caching {path} as {identifier!r}")
        tags.append(render_tag(identifier, content))
    return tags


def insert_before_marker(html: str, tags: Sequence[str], destination: Path) -> str:
    """Insert the tag blocks right before the first closing body tag."""
    idx = html.find(INSERTION_MARKER)
    if idx < 0:
        raise MissingInsertionPointError(destination, INSERTION_MARKER)
    return html[:idx] + "\n".join(tags) + html[idx:]


def bundle(
    destination: Path | str,
    sources: str | Sequence[str] | None,
    options: BundleOptions | None = None,
    *,
    cwd: Path | None = None,
    encoding: str = "utf-8",
) -> str:
    """Bundle source templates into the destination HTML file.

    The destination is rewritten in place with one script tag per matched
    source inserted before ``</body>``.

    Args:
        destination: Existing HTML file to update
        sources: Glob pattern or list of patterns
        options: Base prefixes and filters (defaults to none)
        cwd: Directory relative paths are resolved against (default: cwd)
        encoding: Encoding of sources and destination

    Returns:
        The updated HTML
    """
    if options is None:
        options = BundleOptions()
    cwd = Path(cwd) if cwd is not None else None
    dest = resolve_destination(Path(destination), cwd)

    patterns = src.normalize_patterns(sources)
    matched = src.expand_patterns(patterns, cwd)
    files = src.existing_files(matched, cwd)
    logger.debug(f"{dest}: {len(files)} of {len(matched)} matched file(s) to cache")

    tags = build_tags(files, options, cwd, encoding)

    html = insert_before_marker(read_text(dest, encoding), tags, dest)
    atomic_write_text(dest, html, mode=file_mode(dest), encoding=encoding)

    return html


def bundle_all(
    targets: Iterable[BundleTarget],
    options: BundleOptions,
    *,
    cwd: Path | None = None,
    encoding: str = "utf-8",
    force: bool = False,
) -> BundleReport:
    """Bundle each target in turn.

    Args:
        targets: Targets to process, in order
        options: Options applied to every target
        cwd: Directory relative paths are resolved against
        encoding: Encoding of sources and destinations
        force: Log failures and continue instead of raising

    Returns:
        Updated and failed destinations
    """
    report = BundleReport()
    for target in targets:
        try:
            bundle(
                target.destination,
                target.sources,
                options,
                cwd=cwd,
                encoding=encoding,
            )
        except BundleCacheError as e:
            if not force:
                raise
            logger.warning(f"{e} Used --force, continuing.")
            report.failed.append(target.destination)
            continue

        logger.info(f"File {target.destination} updated with cache.")
        report.updated.append(target.destination)

    return report
