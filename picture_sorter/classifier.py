"""Classifier: date, folder and move for a single file."""
from __future__ import annotations

from pathlib import Path
from typing import Optional
import logging

from .errors import DirectoryCreationError
from .extractor import extract_date
from .grouper import DestinationResolver
from .models import FailureKind, ProcessingResult
from .mover import move_file


def _failure_kind(exc: Exception) -> FailureKind:
    if isinstance(exc, DirectoryCreationError):
        return FailureKind.DIRECTORY_CREATION
    if isinstance(exc, FileNotFoundError):
        return FailureKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return FailureKind.PERMISSION_DENIED
    return FailureKind.IO_FAILURE


def _reason(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or type(exc).__name__


class FileClassifier:
    """Moves one file into `<dest_root>/<YYYY-MM>/` and reports what happened.

    `classify` never raises: every error is turned into a failed
    ProcessingResult so that sibling files keep going.
    """

    def __init__(self, resolver: Optional[DestinationResolver] = None):
        self.resolver = resolver or DestinationResolver()

    def classify(self, file_path, dest_root) -> ProcessingResult:
        path = Path(file_path)
        try:
            captured = extract_date(path)
            folder = self.resolver.ensure_folder(dest_root, captured)
            dest, status = move_file(path, folder, return_status=True)
        except Exception as exc:
            logging.warning("Failed to sort %s: %s", path, exc)
            return ProcessingResult.failed(path, _reason(exc), _failure_kind(exc))

        logging.info("Moved %s -> %s", path.name, dest)
        return ProcessingResult.moved(path, dest, replaced=status == "replaced")
