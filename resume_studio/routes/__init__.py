"""HTTP routes and shared response helpers."""

from flask import Response, jsonify
from werkzeug.http import HTTP_STATUS_CODES

from resume_studio.services.export import ExportArtifact


def error_response(message: str, status: int = 400, details: dict = None):
    """Create a standardized error response."""
    body = {
        "error": HTTP_STATUS_CODES.get(status, "Error"),
        "message": message,
        "status": status,
    }
    if details is not None:
        body["details"] = details
    return jsonify(body), status


def artifact_response(artifact: ExportArtifact) -> Response:
    """Serve an export as a file download."""
    return Response(
        artifact.content,
        mimetype=artifact.mimetype,
        headers={
            'Content-Disposition': f'attachment; filename="{artifact.filename}"'
        }
    )
