"""Picture Sorter package - move photos into YYYY-MM folders by capture date."""

from .classifier import FileClassifier
from .config import SorterConfig, load_config
from .errors import ConfigurationError, DirectoryCreationError, EnumerationError, PictureSorterError
from .extractor import extract_date
from .grouper import DestinationResolver, make_group_name
from .models import BatchReport, BatchStatus, FailureKind, Outcome, ProcessingResult, SourceFile
from .mover import move_file
from .processor import BatchProcessor
from .scanner import scan_images

__all__ = [
    "BatchProcessor", "BatchReport", "BatchStatus", "FileClassifier", "DestinationResolver",
    "ProcessingResult", "Outcome", "FailureKind", "SourceFile", "SorterConfig", "load_config",
    "extract_date", "make_group_name", "move_file", "scan_images",
    "PictureSorterError", "ConfigurationError", "EnumerationError", "DirectoryCreationError",
]
