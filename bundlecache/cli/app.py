"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ..bundling import engine
from ..config.loader import load_task_file
from ..config.settings import BundleCacheSettings
from ..core.errors import BundleCacheError
from ..core.models import BundleOptions, BundleTarget
from .parsers import parse_filter, select_targets

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="bundlecache",
    help="Bundle template files into an HTML page as AngularJS template cache.",
)


def _configure_logging(verbose: bool, settings: BundleCacheSettings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="[%(levelname)s] %(message)s",
    )


@app.command()
def bundle(
    destination: Annotated[
        Path,
        typer.Argument(help="HTML file receiving the template cache."),
    ],
    sources: Annotated[
        list[str],
        typer.Argument(help="Source files or glob patterns, in output order."),
    ],
    base: Annotated[
        list[str],
        typer.Option(
            "--base",
            help="Regex prefix stripped from template ids. Repeatable.",
            metavar="REGEX",
        ),
    ] = [],
    filters: Annotated[
        list[str],
        typer.Option(
            "--filter",
            help="Content filter per extension (built-in name or MODULE:FUNCTION). Repeatable.",
            metavar="EXT=FILTER",
        ),
    ] = [],
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Bundle SOURCES into DESTINATION before its closing body tag."""
    settings = BundleCacheSettings()
    _configure_logging(verbose, settings)

    filter_specs = dict(map(parse_filter, filters))
    try:
        options = BundleOptions(base=base, filters=filter_specs)
    except ValidationError as e:
        raise typer.BadParameter(str(e), param_hint="--base") from e
    except BundleCacheError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    try:
        engine.bundle_all(
            [BundleTarget(destination=destination, sources=sources)],
            options,
            encoding=settings.encoding,
        )
    except BundleCacheError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e


@app.command()
def run(
    targets: Annotated[
        Optional[list[str]],
        typer.Argument(help="Targets to run (default: all targets)."),
    ] = None,
    config_file: Annotated[
        str,
        typer.Option(
            "--config",
            "-c",
            help="Task file (default: $BUNDLECACHE_CONFIG_FILE or bundlecache.yaml).",
            metavar="PATH",
        ),
    ] = "",
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Continue with the remaining destinations after a failure.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Run the targets declared in the task file."""
    settings = BundleCacheSettings()
    _configure_logging(verbose, settings)

    config_path = Path(config_file) if config_file else settings.config_file

    try:
        task_file = load_task_file(config_path)
    except BundleCacheError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    names = select_targets(targets or [], list(task_file.targets))
    # Paths in the task file are relative to the file itself
    cwd = config_path.absolute().parent

    failed = 0
    for name in names:
        logger.info(f'Running "bundlecache:{name}"')
        try:
            report = engine.bundle_all(
                task_file.bundle_targets(name),
                task_file.options_for(name),
                cwd=cwd,
                encoding=settings.encoding,
                force=force,
            )
        except BundleCacheError as e:
            logger.error(str(e))
            raise typer.Exit(code=1) from e
        failed += len(report.failed)

    if failed:
        logger.error(f"{failed} destination(s) failed")
        raise typer.Exit(code=1)

    logger.debug(f"Completed: {len(names)} target(s)")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
