"""Async sort job runner."""
from __future__ import annotations

import logging
import threading
import uuid

from picture_sorter.config import SorterConfig
from picture_sorter.errors import PictureSorterError
from picture_sorter.processor import BatchProcessor
from picture_sorter.services.job_store import sort_jobs, now_ts


def _run(job_id: str, source: str, dest: str, config: SorterConfig | None):
    job = sort_jobs.raw(job_id)

    def progress(done: int, total: int, message: str):
        sort_jobs.update(job_id,
                         processed=done,
                         total=total,
                         message=message,
                         last_update=now_ts())

    sort_jobs.update(job_id, state="running", start_time=now_ts())
    try:
        report = BatchProcessor(config).run(source, dest, progress, cancel_event=job.cancel_event)
    except PictureSorterError as exc:
        sort_jobs.update(job_id, state="error", error=str(exc), finished_time=now_ts())
        return
    except Exception as exc:
        logging.exception("Sort job %s crashed", job_id)
        sort_jobs.update(job_id, state="error", error=str(exc), finished_time=now_ts())
        return

    sort_jobs.update(job_id,
                     state="done",
                     status=report.status.value,
                     succeeded=report.succeeded,
                     failed=report.failed,
                     errors=list(report.failures),
                     report=report.to_dict(),
                     finished_time=now_ts())


def start_sort_job(source: str, dest: str, config: SorterConfig | None = None) -> str:
    job_id = uuid.uuid4().hex
    sort_jobs.create(job_id, {"state": "pending", "processed": 0, "total": 0, "errors": []})
    threading.Thread(target=_run, args=(job_id, source, dest, config), daemon=True).start()
    return job_id


def cancel_sort_job(job_id: str) -> bool:
    """Stop dispatching new files for a job. Returns False for an unknown job."""
    return sort_jobs.cancel(job_id)
