"""Task file loading."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..core.errors import ConfigError
from ..core.models import TaskFile

logger = logging.getLogger(__name__)


def load_task_file(path: Path) -> TaskFile:
    """Load and validate a YAML task file.

    Args:
        path: Task file path

    Returns:
        Validated task file

    Raises:
        ConfigError: if the file is missing, is not YAML or fails validation
    """
    if not path.is_file():
        raise ConfigError(f"Task file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Task file {path} must contain a mapping")

    try:
        task_file = TaskFile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid task file {path}:\n{e}") from e

    for name in task_file.targets:
        task_file.options_for(name)

    logger.debug(f"Loaded {len(task_file.targets)} target(s) from {path}")
    return task_file
