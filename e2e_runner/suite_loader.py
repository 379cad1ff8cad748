"""Load allow-lists and suite modules."""

import importlib
import logging
from collections.abc import Sequence
from pathlib import Path

import yaml

from e2e_runner.models.suite import AllowList

log = logging.getLogger(__name__)


def load_allow_list(path: Path) -> AllowList:
    """Load and validate an allow-list file.

    Args:
        path: Path to a YAML file with ``version`` and ``tests`` keys

    Returns:
        Parsed allow-list

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty or does not match the schema

    """
    content = path.read_text()
    data = yaml.safe_load(content)
    if data is None:
        raise ValueError(f"Allow-list file is empty: {path}")

    return AllowList.model_validate(data)


def load_suites(module_names: Sequence[str]) -> None:
    """Import suite modules so their tests register themselves."""
    for module_name in module_names:
        log.debug("Importing suite module %s", module_name)
        importlib.import_module(module_name)
