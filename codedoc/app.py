"""HTTP service that turns an uploaded codebase archive into Word documentation."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import threading
import uuid
from pathlib import Path
from typing import Sequence

from flask import Flask, Response, jsonify, request, send_file, send_from_directory

from codedoc.analyzer import AnalysisError, FileAnalyzer
from codedoc.config import Config, load_config
from codedoc.docxwriter import DocxGenerator
from codedoc.fileutils import UnsupportedArchiveError, cleanup_dir, create_dir, extract_archive

log = logging.getLogger(__name__)

VALID_ARCHIVE_EXTENSIONS: tuple[str, ...] = (".zip", ".tar", ".gz")
DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
STATIC_DIR = "web/static"
JOBS_EXTENSION = "codedoc_jobs"


def is_valid_archive(ext: str) -> bool:
    """Tell whether ext is an accepted archive extension (already lower-cased)."""
    return ext in VALID_ARCHIVE_EXTENSIONS


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _job_upload_dir(config: Config, job_id: str) -> Path:
    return Path(config.upload_path) / job_id


def _job_output_name(job_id: str) -> str:
    return f"{job_id}_documentation.docx"


def process_codebase(
    job_id: str, file_path: str | os.PathLike[str], config: Config | None = None
) -> Path | None:
    """Extract, analyse and document an uploaded archive.

    Returns the path of the generated document, or None when a step failed;
    failures are logged and leave the job's upload directory in place.
    """
    config = config or load_config()
    log.info("Starting processing for job %s", job_id)

    upload_dir = _job_upload_dir(config, job_id)
    extract_path = upload_dir / "extracted"
    try:
        extract_archive(file_path, extract_path)
    except (UnsupportedArchiveError, OSError, ValueError) as exc:
        log.error("Failed to extract archive for job %s: %s", job_id, exc)
        return None
    log.info("Extraction complete for job %s", job_id)

    try:
        project = FileAnalyzer().analyze_project(extract_path)
    except AnalysisError as exc:
        log.error("Failed to analyze project for job %s: %s", job_id, exc)
        return None
    log.info("Analysis complete for job %s: %s (%s)", job_id, project.name, project.type)

    output_path = Path(config.output_path) / _job_output_name(job_id)
    try:
        DocxGenerator().generate_documentation(project, output_path)
    except OSError as exc:
        log.error("Failed to generate documentation for job %s: %s", job_id, exc)
        return None
    log.info("Documentation generated successfully for job %s", job_id)

    cleanup_dir(upload_dir)
    return output_path


def _error(status: int, message: str) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def create_app(config: Config | None = None) -> Flask:
    """Build the web application serving the upload, status and download API."""
    config = config or load_config()
    static_dir = os.path.abspath(STATIC_DIR)
    app = Flask(__name__, static_folder=static_dir, static_url_path="")
    app.config["MAX_CONTENT_LENGTH"] = config.max_file_size
    app.extensions[JOBS_EXTENSION] = {}

    @app.after_request
    def _cors_and_log(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,HEAD,OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Origin, Content-Type, Accept"
        log.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    @app.get("/")
    def index():
        return send_from_directory(static_dir, "index.html")

    @app.post("/api/upload")
    def upload_codebase():
        upload = request.files.get("codebase")
        filename = os.path.basename((upload.filename or "").replace("\\", "/")) if upload else ""
        if upload is None or not filename:
            return _error(400, "No file uploaded")

        if not is_valid_archive(_extension(filename).lower()):
            return _error(400, "Invalid file type. Please upload .zip, .tar, or .tar.gz files")

        job_id = str(uuid.uuid4())
        upload_dir = _job_upload_dir(config, job_id)
        try:
            create_dir(upload_dir)
        except OSError:
            return _error(500, "Failed to create upload directory")

        file_path = upload_dir / filename
        try:
            upload.save(file_path)
        except OSError:
            return _error(500, "Failed to save uploaded file")

        worker = threading.Thread(
            target=process_codebase,
            args=(job_id, file_path, config),
            name=f"codedoc-job-{job_id}",
            daemon=True,
        )
        app.extensions[JOBS_EXTENSION][job_id] = worker
        worker.start()

        return jsonify(
            {
                "job_id": job_id,
                "message": "File uploaded successfully. Processing started.",
                "status": "processing",
            }
        )

    @app.get("/api/download/")
    def download_without_name():
        return _error(400, "Filename is required")

    @app.get("/api/download/<filename>")
    def download_documentation(filename: str):
        if not filename:
            return _error(400, "Filename is required")
        output_root = Path(config.output_path).resolve()
        file_path = (output_root / filename).resolve()
        if not file_path.is_relative_to(output_root) or not file_path.is_file():
            return _error(404, "Documentation not found")
        response = send_file(file_path, mimetype=DOCX_MIMETYPE)
        response.headers["Content-Disposition"] = f"attachment; filename={filename}"
        return response

    @app.get("/api/status/<job_id>")
    def get_status(job_id: str):
        output_name = _job_output_name(job_id)
        if (Path(config.output_path) / output_name).exists():
            return jsonify(
                {
                    "status": "completed",
                    "message": "Documentation generated successfully",
                    "download_url": f"/api/download/{output_name}",
                }
            )
        if _job_upload_dir(config, job_id).exists():
            return jsonify(
                {"status": "processing", "message": "Documentation is being generated"}
            )
        return _error(404, "Job not found")

    return app


def _load_dotenv(path: str | os.PathLike[str] = ".env") -> bool:
    """Export KEY=VALUE lines from path without overriding the environment."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError:
        return False
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        key, sep, value = line.partition("=")
        if not sep or not key.strip():
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        os.environ.setdefault(key.strip(), value)
    return True


def main(argv: Sequence[str] | None = None) -> None:
    """Start the documentation server."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    if not _load_dotenv():
        log.info("No .env file found")

    parser = argparse.ArgumentParser(description="Generate Word documentation for codebases.")
    parser.add_argument("--port", help="port to listen on (default: $PORT or 3000)")
    args = parser.parse_args(argv)

    config = load_config()
    if args.port:
        config = dataclasses.replace(config, port=args.port)

    app = create_app(config)
    log.info("Server starting on port %s", config.port)
    app.run(host="0.0.0.0", port=int(config.port))


if __name__ == "__main__":
    main()