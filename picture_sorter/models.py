from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional
import time


@dataclass(frozen=True)
class SourceFile:
    path: Path
    name: str
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> "SourceFile":
        return cls(path=path, name=path.name, extension=path.suffix.lower())


class Outcome(Enum):
    MOVED = "moved"
    FAILED = "failed"


class FailureKind(Enum):
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    DIRECTORY_CREATION = "directory_creation"
    IO_FAILURE = "io_failure"


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of classifying a single file."""

    name: str
    source: Path
    outcome: Outcome
    destination: Optional[Path] = None
    replaced: bool = False  # an existing file at the destination was overwritten
    reason: str = ""
    kind: Optional[FailureKind] = None

    @classmethod
    def moved(cls, source: Path, destination: Path, replaced: bool = False) -> "ProcessingResult":
        return cls(name=source.name, source=source, outcome=Outcome.MOVED,
                   destination=destination, replaced=replaced)

    @classmethod
    def failed(cls, source: Path, reason: str, kind: FailureKind) -> "ProcessingResult":
        return cls(name=source.name, source=source, outcome=Outcome.FAILED, reason=reason, kind=kind)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.MOVED

    @property
    def message(self) -> str:
        if self.ok:
            return self.name
        return f"Error processing file {self.name}: {self.reason}"


class BatchStatus(Enum):
    COMPLETED = "completed"
    COMPLETED_WITH_FAILURES = "completed_with_failures"
    NO_ELIGIBLE_FILES = "no_eligible_files"
    CANCELLED = "cancelled"


@dataclass
class BatchReport:
    """Aggregate of one batch run.

    Mutated by worker completions while the batch runs; callers must hold the
    processor's lock around `record`. Failure messages are kept in completion
    order, which is not the dispatch order.
    """

    source: Path
    destination: Path
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    failures: List[str] = field(default_factory=list)
    results: List[ProcessingResult] = field(default_factory=list)
    cancelled: bool = False
    started_at: float = field(default_factory=time.time)
    finished_at: Optional[float] = None

    def record(self, result: ProcessingResult) -> int:
        """Add one result and return the new processed count."""
        self.results.append(result)
        if result.ok:
            self.succeeded += 1
        else:
            self.failed += 1
            self.failures.append(result.message)
        return self.processed

    def finish(self) -> "BatchReport":
        self.finished_at = time.time()
        return self

    @property
    def processed(self) -> int:
        return self.succeeded + self.failed

    @property
    def skipped(self) -> int:
        return self.total - self.processed

    @property
    def status(self) -> BatchStatus:
        if self.total == 0:
            return BatchStatus.NO_ELIGIBLE_FILES
        if self.cancelled:
            return BatchStatus.CANCELLED
        if self.failed:
            return BatchStatus.COMPLETED_WITH_FAILURES
        return BatchStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": str(self.source),
            "destination": str(self.destination),
            "status": self.status.value,
            "total": self.total,
            "processed": self.processed,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "failures": list(self.failures),
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }
