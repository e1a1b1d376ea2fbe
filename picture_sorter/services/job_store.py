"""Thread-safe store for background sort jobs."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Any
import threading
import time


def now_ts() -> int:
    return int(time.time())


@dataclass
class Job:
    job_id: str
    data: Dict[str, Any] = field(default_factory=dict)
    cancel_event: threading.Event = field(default_factory=threading.Event)


class JobStore:
    def __init__(self):
        self._jobs: Dict[str, Job] = {}
        self._lock = threading.Lock()

    def create(self, job_id: str, initial: Dict[str, Any] | None = None) -> Job:
        with self._lock:
            job = Job(job_id=job_id, data=dict(initial or {}))
            self._jobs[job_id] = job
            return job

    def update(self, job_id: str, **kwargs) -> None:
        with self._lock:
            job = self._jobs.get(job_id)
            if job:
                job.data.update(kwargs)

    def get(self, job_id: str) -> Dict[str, Any] | None:
        """Return a copy of the job's data, or None for an unknown id."""
        with self._lock:
            job = self._jobs.get(job_id)
            return dict(job.data) if job else None

    def cancel(self, job_id: str) -> bool:
        with self._lock:
            job = self._jobs.get(job_id)
            if not job:
                return False
            job.cancel_event.set()
            job.data["cancel_requested"] = True
            return True

    def raw(self, job_id: str) -> Job | None:
        with self._lock:
            return self._jobs.get(job_id)


sort_jobs = JobStore()
