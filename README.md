# codedoc

codedoc is a small web service. You upload a codebase as a `.zip` archive, and it
produces a Word (`.docx`) document that describes the project. The document has a
title and thirteen numbered sections:

1. Project Overview
2. Architecture Diagram
3. Tech Stack Summary
4. Folder Structure
5. Setup Instructions
6. API Reference
7. Parsers Info
8. Data Flow
9. External Services
10. Deployment Info
11. Future Roadmap
12. Common Issues
13. Developer Notes

If a section has no content, it holds a short "No … available/provided" line.

## Installation

```
pip install .
```

The only runtime dependency is Flask.

## Running the server

```
codedoc
codedoc --port 8080
```

The server listens on all interfaces. It uses `--port` if given, otherwise the
`PORT` environment variable, otherwise 3000. At start-up, `KEY=VALUE` lines from
a `.env` file in the current directory are exported into the environment. They
never override variables that are already set. Files in `./web/static` are served
at `/`, and `/` itself serves `web/static/index.html`.

These environment variables are read:

| Variable      | Default     | Purpose                                  |
|---------------|-------------|------------------------------------------|
| `PORT`        | `3000`      | Port the server listens on               |
| `UPLOAD_PATH` | `./uploads` | Where uploaded archives are stored/unpacked |
| `OUTPUT_PATH` | `./output`  | Where generated documents are written    |

Request bodies may be up to 100 MB. Every response carries permissive CORS
headers (`Access-Control-Allow-Origin: *`).

## HTTP API

### `POST /api/upload`

Send a multipart form with the archive in the `codebase` field. The accepted
extensions are `.zip`, `.tar` and `.gz`; any other name gets a 400 response.

```
curl -F codebase=@project.zip http://localhost:3000/api/upload
```

Example response:

```json
{"job_id": "…", "message": "File uploaded successfully. Processing started.", "status": "processing"}
```

The archive is saved under `UPLOAD_PATH/<job_id>/`. It is then processed in a
background thread, which runs `codedoc.app.process_codebase`. That function
extracts the archive, analyses it, writes `OUTPUT_PATH/<job_id>_documentation.docx`
and removes the job's upload directory.

### `GET /api/status/<job_id>`

- `{"status": "completed", "download_url": "/api/download/<job_id>_documentation.docx", …}`
  once the document exists.
- `{"status": "processing", …}` while the job's upload directory still exists.
- 404 `{"error": "Job not found"}` otherwise.

### `GET /api/download/<filename>`

Returns a file from `OUTPUT_PATH` as a `.docx` attachment. Names that do not
resolve to a file inside `OUTPUT_PATH` get a 404 response.

## Using it as a library

```python
from codedoc.analyzer import FileAnalyzer
from codedoc.docxwriter import DocxGenerator

project = FileAnalyzer().analyze_project("path/to/project")
DocxGenerator().generate_documentation(project, "output/project_documentation.docx")
```

- `codedoc.detection.detect_project_type` names the project type: Node.js,
  Python, PHP/Laravel, Go, Java, Ruby/Rails, .NET or Generic. Marker files
  decide first. Otherwise the most common source-file extension decides.
- `codedoc.analyzer.FileAnalyzer.analyze_project` picks a parser for that type
  and fills a `codedoc.models.Project`. It raises `codedoc.analyzer.AnalysisError`
  when the dependency list cannot be read.
- `codedoc.nodejs.NodeJSParser` handles Node.js projects. It reads `package.json`
  dependencies, known framework files, Express-style routes in `app`, `server`
  and `routes/` files, and service hints in `package.json`, `.env` and
  `docker-compose.yml`.
- `codedoc.analyzer.GenericParser` handles every other type. It reports the
  languages found, any pins in `requirements.txt`, and services mentioned in
  `.env`, `docker-compose.yml` or `requirements.txt`.
- `codedoc.docxwriter.DocxDocument` is a minimal `.docx` writer with
  `add_paragraph`, `add_heading`, `add_table` and `save`, built on the standard
  library's `zipfile`.
- `codedoc.fileutils` provides `create_dir`, `extract_archive` and `cleanup_dir`.

## Limitations

- Only zip archives can be extracted. A `.tar` or `.gz` upload is accepted, but
  its job fails and produces no document.
- Only Node.js projects get a dedicated parser. Python, PHP, Go, Java, Ruby and
  .NET projects are detected as such but analysed with the generic parser.
- A project detected as Node.js that has no readable `package.json` fails
  analysis.
- Job state is not stored anywhere. When processing fails, the error is logged
  and the upload directory is left in place. The status endpoint then keeps
  reporting `processing` for that job.