"""Grouper: map capture dates to destination folders and create them on demand."""
from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Dict, List
import logging
import threading

from .config import DEFAULT_FOLDER_FORMAT
from .errors import DirectoryCreationError


def make_group_name(captured: date, folder_format: str = DEFAULT_FOLDER_FORMAT) -> str:
    """Return the folder name for `captured`, e.g. '2021-05'."""
    return captured.strftime(folder_format)


class DestinationResolver:
    """Creates year-month folders under a destination root.

    Safe to share between worker threads: each distinct folder has its own lock,
    held only around the exists-or-create step. Locks and `created_folders`
    are kept for the life of the resolver, so use one resolver per batch
    (BatchProcessor builds its own; the job runner builds a processor per job).
    """

    def __init__(self, folder_format: str = DEFAULT_FOLDER_FORMAT):
        self.folder_format = folder_format
        self.created_folders: List[Path] = []
        self._locks: Dict[Path, threading.Lock] = {}
        self._guard = threading.Lock()

    def folder_for(self, dest_root, captured: date) -> Path:
        return Path(dest_root) / make_group_name(captured, self.folder_format)

    def _lock_for(self, folder: Path) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(folder, threading.Lock())

    def ensure_folder(self, dest_root, captured: date) -> Path:
        folder = self.folder_for(dest_root, captured)
        with self._lock_for(folder):
            if folder.is_dir():
                return folder
            try:
                folder.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                # another process got there first
                if folder.is_dir():
                    return folder
                raise DirectoryCreationError(folder, exc) from exc
            with self._guard:
                self.created_folders.append(folder)
        logging.info("Created folder %s", folder)
        return folder
