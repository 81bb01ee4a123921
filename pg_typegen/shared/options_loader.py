"""Options file loading utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final, Sequence

import yaml

from .errors import OptionsError

# Looked up in order when no explicit options file is given
DEFAULT_OPTIONS_FILES: Final[tuple[str, ...]] = (
    "typegen.yaml",
    "typegen.yml",
    ".typegen.yaml",
)


def load_options_file(options_path: Path) -> dict[str, Any]:
    """Load generator options from a YAML file.

    Args:
        options_path: Path to the options file.

    Returns:
        The parsed options mapping. An empty file yields an empty mapping.

    Raises:
        OptionsError: If the file cannot be read or parsed.
    """
    try:
        content = options_path.read_text(encoding="utf-8")
    except OSError as e:
        raise OptionsError(f"Failed to read options file: {e}", str(options_path)) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise OptionsError(f"Invalid YAML: {e}", str(options_path)) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise OptionsError("Options root must be a mapping", str(options_path))

    return data


def find_options_file(
    directory: Path,
    candidates: Sequence[str] = DEFAULT_OPTIONS_FILES,
) -> Path | None:
    """Return the first default options file present in ``directory``."""
    for name in candidates:
        path = directory / name
        if path.is_file():
            return path
    return None
