"""Path checks run before a batch starts."""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

from picture_sorter.errors import ConfigurationError


def resolve_directory(value, label: str) -> Path:
    """Expand and check a user-supplied directory path."""
    if value is None or not str(value).strip():
        raise ConfigurationError(f"No {label} folder selected")
    path = Path(str(value).strip()).expanduser()
    if not path.is_dir():
        raise ConfigurationError(f"{label.capitalize()} folder is not a directory: {path}")
    return path


def validate_source_dest(source, dest) -> Tuple[Path, Path]:
    return resolve_directory(source, "source"), resolve_directory(dest, "destination")
