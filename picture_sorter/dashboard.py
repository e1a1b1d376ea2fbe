from flask import Flask, request, jsonify

from picture_sorter.services.sort_runner import start_sort_job, cancel_sort_job
from picture_sorter.services.job_store import sort_jobs, now_ts

app = Flask(__name__)


@app.route("/api/run_async", methods=["POST"])
def api_run_async():
    data = request.get_json(silent=True) or {}
    source = data.get("source")
    dest = data.get("dest")
    if not source or not dest:
        return jsonify({"error": "source and dest required"}), 400
    job_id = start_sort_job(source, dest)
    return jsonify({"job": job_id})


@app.route("/api/status", methods=["GET"])
def api_status():
    job_id = request.args.get("job")
    if not job_id:
        return jsonify({"error": "job id required"}), 400
    job = sort_jobs.get(job_id)
    if not job:
        return jsonify({"error": "job not found"}), 404
    total = job.get("total") or 0
    processed = job.get("processed") or 0
    elapsed = None
    start = job.get("start_time")
    if start:
        elapsed = (job.get("finished_time") or now_ts()) - start
    response = dict(job)
    response["elapsed_seconds"] = elapsed
    response["percent"] = round(processed / total * 100, 2) if total else None
    return jsonify(response)


@app.route("/api/cancel", methods=["POST"])
def api_cancel():
    data = request.get_json(silent=True) or {}
    job_id = data.get("job")
    if not job_id:
        return jsonify({"error": "job id required"}), 400
    if not cancel_sort_job(job_id):
        return jsonify({"error": "job not found"}), 404
    return jsonify({"job": job_id, "cancel_requested": True})


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=True)
