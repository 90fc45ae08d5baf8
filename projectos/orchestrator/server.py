"""
HTTP API for ProjectOS.

Exposes the project store and the assistant to a presentation layer as
plain request/response JSON endpoints.
"""

from flask import Flask, jsonify, request
from pydantic import ValidationError

from ..project.store import get_project_store
from ..project.types import FailureKind
from ..shared.config import API_HOST, API_PORT
from ..shared.logger import get_logger
from .service import get_assistant_service
from .state import ChatRequest, CreateProjectRequest

logger = get_logger("api", __name__)
app = Flask(__name__)
# Keep front matter keys in file order
app.json.sort_keys = False

_STATUS_BY_FAILURE = {
    FailureKind.VALIDATION: 400,
    FailureKind.ALREADY_EXISTS: 409,
    FailureKind.IO: 503,
}


@app.route("/health", methods=["GET"])
def health():
    """Liveness check reporting the bound project directory."""
    store = get_project_store()
    return jsonify({"status": "ok", "projects_dir": str(store.root)}), 200


# ============================================
# Project Endpoints
# ============================================

@app.route("/api/projects", methods=["GET"])
def list_projects():
    """List all projects as summaries.

    Response:
        [{"identifier": "...", "title": "...", "status": "...", ...}]
        in directory order; dates rendered as ISO strings.
    """
    summaries = get_project_store().list_projects()
    return jsonify([s.model_dump(mode="json") for s in summaries]), 200


@app.route("/api/projects/<identifier>", methods=["GET"])
def get_project(identifier: str):
    """Get one project with its metadata and Markdown narrative.

    Errors:
        404: Project not found or unreadable
    """
    document = get_project_store().read_project(identifier)
    if document is None:
        return jsonify({"error": f"Project not found: {identifier}"}), 404
    return jsonify(document.model_dump(mode="json")), 200


@app.route("/api/projects", methods=["POST"])
def create_project():
    """Create a project from an already encoded document.

    Request body (JSON):
        {"filename": "roof.md", "content": "---\\ntitle: ...\\n---\\n...", "overwrite": false}

    Response:
        201 {"success": true, "identifier": "roof.md"}

    Errors:
        400: Invalid body or identifier
        409: Project already exists (without overwrite)
        503: Write failed
    """
    try:
        payload = CreateProjectRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": "Validation failed", "details": e.errors(include_url=False)}), 400

    result = get_project_store().create_project(payload.filename, payload.content, overwrite=payload.overwrite)
    if not result.success:
        status = _STATUS_BY_FAILURE.get(result.error_kind, 500)
        return jsonify(result.model_dump(mode="json")), status
    return jsonify(result.model_dump(mode="json")), 201


# ============================================
# Assistant Endpoint
# ============================================

@app.route("/api/assistant/chat", methods=["POST"])
def chat():
    """Send an instruction to the assistant.

    Request body (JSON):
        {"message": "Create a solar project", "history": [{"role": "user", "content": "..."}]}

    Response:
        200 {"kind": "created" | "reply" | "error", "message": "...", "identifier": ..., "error_kind": ...}
        Assistant and store failures are reported in the body, not the status code.

    Errors:
        400: Invalid body
    """
    try:
        payload = ChatRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": "Validation failed", "details": e.errors(include_url=False)}), 400

    outcome = get_assistant_service().handle_instruction(payload.message, history=payload.history)
    return jsonify(outcome.model_dump(mode="json")), 200


def main() -> None:
    logger.info(f"Starting ProjectOS API on {API_HOST}:{API_PORT}")
    app.run(host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
