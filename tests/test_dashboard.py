import os
import threading
import time

import pytest

from picture_sorter import classifier as classifier_module
from picture_sorter.dashboard import app
from picture_sorter.extractor import extract_date
from picture_sorter.services.job_store import JobStore


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def wait_for_job(client, job_id, timeout=10.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        payload = client.get(f"/api/status?job={job_id}").get_json()
        if payload["state"] in ("done", "error"):
            return payload
        time.sleep(0.05)
    raise AssertionError(f"job {job_id} did not finish")


def test_run_and_poll(client, source, dest, make_image):
    make_image(source / "a.jpg", taken="2021:05:03 10:00:00")
    make_image(source / "b.jpg", taken="2019:08:20 10:00:00")

    resp = client.post("/api/run_async", json={"source": str(source), "dest": str(dest)})
    assert resp.status_code == 200
    job = wait_for_job(client, resp.get_json()["job"])

    assert job["state"] == "done"
    assert job["status"] == "completed"
    assert job["processed"] == job["total"] == 2
    assert job["percent"] == 100.0
    assert job["report"]["succeeded"] == 2
    assert (dest / "2021-05" / "a.jpg").exists()
    assert (dest / "2019-08" / "b.jpg").exists()


def test_empty_source_job(client, source, dest):
    job_id = client.post("/api/run_async", json={"source": str(source), "dest": str(dest)}).get_json()["job"]
    job = wait_for_job(client, job_id)
    assert job["state"] == "done"
    assert job["status"] == "no_eligible_files"
    assert job["percent"] is None


def test_bad_path_marks_job_as_error(client, tmp_path, dest):
    job_id = client.post("/api/run_async", json={"source": str(tmp_path / "missing"), "dest": str(dest)}).get_json()["job"]
    job = wait_for_job(client, job_id)
    assert job["state"] == "error"
    assert "not a directory" in job["error"]


def test_run_requires_both_paths(client, source):
    resp = client.post("/api/run_async", json={"source": str(source)})
    assert resp.status_code == 400


def test_status_errors(client):
    assert client.get("/api/status").status_code == 400
    assert client.get("/api/status?job=unknown").status_code == 404


def test_cancel_unknown_job(client):
    assert client.post("/api/cancel", json={}).status_code == 400
    assert client.post("/api/cancel", json={"job": "unknown"}).status_code == 404


def test_job_store_cancel():
    store = JobStore()
    job = store.create("abc", {"state": "pending"})
    assert store.cancel("abc") is True
    assert job.cancel_event.is_set()
    assert store.get("abc")["cancel_requested"] is True
    assert store.cancel("other") is False
    store.update("other", state="done")
    assert store.get("other") is None


def test_cancel_running_job(client, source, dest, make_image, monkeypatch):
    total = (os.cpu_count() or 1) + 3
    for i in range(total):
        make_image(source / f"img{i:02d}.jpg", taken="2021:05:03 10:00:00")
    release = threading.Event()

    def held(path):
        release.wait(10)
        return extract_date(path)

    monkeypatch.setattr(classifier_module, "extract_date", held)
    job_id = client.post("/api/run_async", json={"source": str(source), "dest": str(dest)}).get_json()["job"]
    try:
        resp = client.post("/api/cancel", json={"job": job_id})
        assert resp.status_code == 200
        assert resp.get_json()["cancel_requested"] is True
    finally:
        release.set()

    job = wait_for_job(client, job_id)
    assert job["state"] == "done"
    assert job["status"] == "cancelled"
    assert job["report"]["skipped"] >= 3
    assert job["report"]["processed"] + job["report"]["skipped"] == total
