"""Sorter settings: defaults plus an optional JSON settings file."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import FrozenSet, Iterable, Optional
import json
import os

from .errors import ConfigurationError

DEFAULT_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif"})
DEFAULT_FOLDER_FORMAT = "%Y-%m"
IDLE_MESSAGE = "Ready"


def normalize_extensions(values: Iterable[str]) -> FrozenSet[str]:
    exts = set()
    for value in values:
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"Invalid extension: {value!r}")
        ext = value.strip().lower()
        if not ext.startswith("."):
            ext = "." + ext
        exts.add(ext)
    return frozenset(exts)


@dataclass(frozen=True)
class SorterConfig:
    extensions: FrozenSet[str] = DEFAULT_EXTENSIONS
    max_workers: Optional[int] = None
    folder_format: str = DEFAULT_FOLDER_FORMAT
    idle_message: str = IDLE_MESSAGE

    def __post_init__(self):
        if self.max_workers is not None:
            _check_workers(self.max_workers)

    def worker_count(self) -> int:
        """Pool size: `max_workers` when set, else the number of CPUs."""
        return self.max_workers or os.cpu_count() or 1

    def with_workers(self, max_workers: Optional[int]) -> "SorterConfig":
        if max_workers is None:
            return self
        _check_workers(max_workers)
        return replace(self, max_workers=max_workers)


def _check_workers(value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"max_workers must be a positive integer, got {value!r}")


def load_config(path: str | Path) -> SorterConfig:
    """Build a SorterConfig from a JSON file. Unknown keys are ignored."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigurationError(f"Settings file not found: {path}") from None
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read settings file {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object")

    options = {}
    if "extensions" in raw:
        if not isinstance(raw["extensions"], list) or not raw["extensions"]:
            raise ConfigurationError("extensions must be a non-empty list")
        options["extensions"] = normalize_extensions(raw["extensions"])
    if raw.get("max_workers") is not None:
        _check_workers(raw["max_workers"])
        options["max_workers"] = raw["max_workers"]
    for key in ("folder_format", "idle_message"):
        if key in raw:
            if not isinstance(raw[key], str) or not raw[key]:
                raise ConfigurationError(f"{key} must be a non-empty string")
            options[key] = raw[key]
    return SorterConfig(**options)
