"""Batch processor: sort every eligible file of a source folder on a thread pool."""
from __future__ import annotations

from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Optional
import logging
import threading

from .classifier import FileClassifier
from .config import SorterConfig
from .grouper import DestinationResolver
from .models import BatchReport, FailureKind, ProcessingResult
from .scanner import scan_images
from .utils.paths import validate_source_dest

ProgressCallback = Callable[[int, int, str], None]


class BatchProcessor:
    """Runs one FileClassifier task per eligible file with bounded parallelism.

    Progress notifications are delivered one at a time, under the same lock
    that guards the report, so `on_progress` never runs concurrently with
    itself and sees a strictly increasing processed count.
    """

    def __init__(self, config: Optional[SorterConfig] = None, classifier: Optional[FileClassifier] = None):
        self.config = config or SorterConfig()
        self.classifier = classifier or FileClassifier(DestinationResolver(self.config.folder_format))
        self._lock = threading.Lock()

    def run(self, source_dir, dest_dir, on_progress: Optional[ProgressCallback] = None,
            cancel_event: Optional[threading.Event] = None) -> BatchReport:
        """Sort `source_dir` into `dest_dir` and return the finished report.

        Raises ConfigurationError for missing or invalid folders and
        EnumerationError when the source can't be listed; per-file problems
        only show up in the report. Setting `cancel_event` stops new files
        from being dispatched; files already running still finish.
        """
        source, dest = validate_source_dest(source_dir, dest_dir)
        files = scan_images(source, self.config.extensions)
        report = BatchReport(source=source, destination=dest, total=len(files))
        self._notify(on_progress, 0, report.total, self.config.idle_message)

        if not files:
            logging.info("No eligible files in %s", source)
            return report.finish()

        workers = self.config.worker_count()
        logging.info("Sorting %d files from %s into %s with %d workers", report.total, source, dest, workers)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="picture-sorter") as pool:
            pending = set()
            for source_file in files:
                if len(pending) >= workers:
                    _done, pending = wait(pending, return_when=FIRST_COMPLETED)
                if cancel_event is not None and cancel_event.is_set():
                    report.cancelled = True
                    break
                pending.add(pool.submit(self._process, source_file.path, dest, report, on_progress))
            wait(pending)

        report.finish()
        if report.cancelled:
            logging.info("Batch cancelled: %d of %d files processed", report.processed, report.total)
        logging.info("Batch finished: %d moved, %d failed", report.succeeded, report.failed)
        return report

    def _process(self, path: Path, dest: Path, report: BatchReport,
                 on_progress: Optional[ProgressCallback]) -> ProcessingResult:
        try:
            result = self.classifier.classify(path, dest)
        except Exception as exc:
            logging.exception("Classifier crashed on %s", path)
            result = ProcessingResult.failed(path, str(exc) or type(exc).__name__, FailureKind.IO_FAILURE)
        with self._lock:
            processed = report.record(result)
            self._notify(on_progress, processed, report.total, result.message)
        return result

    @staticmethod
    def _notify(on_progress: Optional[ProgressCallback], processed: int, total: int, message: str) -> None:
        if on_progress is None:
            return
        try:
            on_progress(processed, total, message)
        except Exception:
            logging.exception("Progress callback failed")
