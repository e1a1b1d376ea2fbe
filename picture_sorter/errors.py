"""Errors raised by picture_sorter."""
from pathlib import Path


class PictureSorterError(Exception):
    """Base error for the project."""


class ConfigurationError(PictureSorterError):
    """Source/destination not provided or unusable, or bad settings."""


class EnumerationError(PictureSorterError):
    """The source directory could not be listed."""


class DirectoryCreationError(PictureSorterError):
    """A destination folder could not be created (and does not exist)."""

    def __init__(self, folder: Path, cause: OSError):
        super().__init__(f"Cannot create folder {folder}: {cause.strerror or cause}")
        self.folder = folder
        self.cause = cause
