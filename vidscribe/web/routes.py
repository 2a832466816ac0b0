"""HTTP routes: one-shot transcription endpoints plus background jobs."""

import json
import logging
import queue
import threading
import time
import uuid

from flask import Blueprint, Response, current_app, jsonify, request

from vidscribe.codec import encode_chunked
from vidscribe.config import load_config
from vidscribe.engine import AppState, TranscriptionPipeline
from vidscribe.errors import InvalidInput, VidscribeError
from vidscribe.export import FORMATS, export
from vidscribe.fetch import fetch_video
from vidscribe.gateway import GatewayClient
from vidscribe.service import handle_standard, handle_visual, request_from_payload

logger = logging.getLogger(__name__)

bp = Blueprint("api", __name__, url_prefix="/api")

# In-memory job store: job_id -> job dict
_jobs: dict[str, dict] = {}

# Finished jobs are dropped this long after they end
JOB_TTL_SECONDS = 3600


def _prune_jobs(now: float) -> None:
    expired = [
        job_id for job_id, job in _jobs.items()
        if job.get("finished_at") is not None and now - job["finished_at"] > JOB_TTL_SECONDS
    ]
    for job_id in expired:
        logger.debug("Dropping expired job %s", job_id)
        del _jobs[job_id]

EXPORT_MIMETYPES = {
    "txt": "text/plain",
    "rtf": "application/rtf",
    "json": "application/json",
    "srt": "application/x-subrip",
    "vtt": "text/vtt",
}


def _client() -> GatewayClient:
    config = current_app.config.get("GATEWAY_CONFIG") or load_config()
    return GatewayClient(config)


def _body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    return data


def _error_response(exc: Exception):
    if isinstance(exc, VidscribeError):
        status = exc.status_code
    else:
        logger.exception("Unhandled error while processing request")
        status = 500
    message = str(exc) or "Unknown error occurred"
    return jsonify({"error": message, "success": False}), status


@bp.route("/transcribe-video", methods=["POST"])
def transcribe_video():
    try:
        return jsonify(handle_standard(_body(), _client))
    except Exception as e:
        return _error_response(e)


@bp.route("/visual-transcribe", methods=["POST"])
def visual_transcribe():
    try:
        return jsonify(handle_visual(_body(), _client))
    except Exception as e:
        return _error_response(e)


@bp.route("/fetch-video", methods=["POST"])
def fetch_video_url():
    try:
        fetched = fetch_video(_body().get("url"))
    except Exception as e:
        return _error_response(e)
    return jsonify({
        "video": encode_chunked(fetched.data),
        "fileName": fetched.file_name,
        "size": fetched.size,
    })


@bp.route("/jobs", methods=["POST"])
def start_job():
    try:
        body = _body()
        mode = body.get("mode", "standard")
        if mode not in ("standard", "visual"):
            raise InvalidInput(f"Unknown mode: {mode}")
        if mode == "visual":
            req = request_from_payload(
                body.get("video"), body.get("fileName"), missing_message="No video data provided"
            )
        else:
            req = request_from_payload(
                body.get("audio") or body.get("video"), body.get("fileName"), body.get("language")
            )
        req.from_url = bool(body.get("fromUrl"))
        client = _client()
    except Exception as e:
        return _error_response(e)

    progress_queue: queue.Queue = queue.Queue()

    def on_progress(step: str, frac: float):
        progress_queue.put({"state": AppState.PROCESSING.value, "step": step, "progress": round(frac, 3)})

    pipeline = TranscriptionPipeline(
        client=client,
        mode=mode,
        on_progress=on_progress,
        sleep=current_app.config["PROGRESS_SLEEP"],
    )

    _prune_jobs(time.monotonic())

    job_id = uuid.uuid4().hex[:12]
    job = {
        "pipeline": pipeline,
        "progress_queue": progress_queue,
        "filename": req.file_name,
        "mode": mode,
        "final": None,
        "finished_at": None,
    }
    _jobs[job_id] = job

    def run():
        try:
            pipeline.run(req)
        except Exception:
            # status already reset to upload with the message recorded
            logger.exception("Job %s failed", job_id)
        finally:
            job["final"] = _final_event(pipeline)
            job["finished_at"] = time.monotonic()
            progress_queue.put(None)  # sentinel

    job["thread"] = threading.Thread(target=run, daemon=True)
    job["thread"].start()
    return jsonify({"job_id": job_id, "mode": mode, "filename": req.file_name})


def _final_event(pipeline: TranscriptionPipeline) -> dict:
    if pipeline.state == AppState.RESULT:
        return {
            "state": AppState.RESULT.value,
            "step": "complete",
            "progress": 1.0,
            "segments": [s.to_dict() for s in pipeline.segments],
        }
    return {"state": pipeline.state.value, "error": pipeline.status.error}


@bp.route("/jobs/<job_id>/progress")
def progress_stream(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    q = job["progress_queue"]

    def generate():
        while True:
            # an earlier stream already drained the queue
            if job["final"] is not None and q.empty():
                yield f"data: {json.dumps(job['final'])}\n\n"
                break
            try:
                msg = q.get(timeout=120)
            except queue.Empty:
                yield "data: {\"error\": \"timeout\"}\n\n"
                break
            if msg is None:
                yield f"data: {json.dumps(job['final'])}\n\n"
                break
            yield f"data: {json.dumps(msg)}\n\n"

    return Response(generate(), mimetype="text/event-stream")


@bp.route("/jobs/<job_id>/status")
def job_status(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    pipeline: TranscriptionPipeline = job["pipeline"]
    resp = pipeline.status.to_dict()
    resp.update({"filename": job["filename"], "mode": job["mode"]})
    if pipeline.state == AppState.RESULT:
        resp["segments"] = [s.to_dict() for s in pipeline.segments]
    return jsonify(resp)


@bp.route("/jobs/<job_id>/segments/<int:index>", methods=["PATCH"])
def edit_segment(job_id: str, index: int):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    pipeline: TranscriptionPipeline = _jobs[job_id]["pipeline"]
    if pipeline.state != AppState.RESULT:
        return jsonify({"error": "Job not complete"}), 409
    if not 0 <= index < len(pipeline.segments):
        return jsonify({"error": "Segment not found"}), 404

    text = (request.get_json(silent=True) or {}).get("text")
    if not isinstance(text, str):
        return jsonify({"error": "Field 'text' must be a string"}), 400

    pipeline.edit_text(index, text)
    return jsonify(pipeline.segments[index].to_dict())


@bp.route("/jobs/<job_id>/export")
def export_job(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    pipeline: TranscriptionPipeline = job["pipeline"]
    if pipeline.state != AppState.RESULT:
        return jsonify({"error": "Job not complete"}), 409

    fmt = request.args.get("format", "txt")
    if fmt not in FORMATS:
        return jsonify({"error": f"Unknown format: {fmt}"}), 400
    timestamps = request.args.get("timestamps", "1") not in ("0", "false", "no")

    try:
        content = export(pipeline.segments, fmt, timestamps)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    stem = "visual-transcript" if job["mode"] == "visual" else "transcript"
    return Response(
        content,
        mimetype=EXPORT_MIMETYPES[fmt],
        headers={"Content-Disposition": f"attachment; filename={stem}.{fmt}"},
    )


@bp.route("/jobs/<job_id>", methods=["DELETE"])
def discard_job(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    pipeline: TranscriptionPipeline = _jobs[job_id]["pipeline"]
    if pipeline.state == AppState.PROCESSING:
        return jsonify({"error": "Job is still processing"}), 409

    pipeline.reset()
    del _jobs[job_id]
    return jsonify({"status": "discarded"})
