"""
Resume Routes
Template listing, preview, export and saved resumes
"""
import logging

from flask import Blueprint, g, jsonify, request
from pydantic import ValidationError

from resume_studio.middleware.identity import require_identity
from resume_studio.routes import artifact_response, error_response
from resume_studio.schemas.resume_export_schema import ExportFormat, RenderResumeRequest, SaveResumeRequest
from resume_studio.services.export import (
    ExportSerializationError,
    RenderCaptureError,
    resume_export_service,
)
from resume_studio.services.resume_store_service import ResumeStoreService

logger = logging.getLogger(__name__)

resume_bp = Blueprint('resumes', __name__, url_prefix='/api/resumes')


def _parse_render_request():
    return RenderResumeRequest.model_validate(request.get_json(silent=True) or {})


@resume_bp.route('/templates', methods=['GET'])
def list_templates():
    """
    Templates available for rendering.

    Returns:
        200: {"templates": [{id, name, description, is_default}]}
    """
    return jsonify({"templates": resume_export_service.get_templates_info()}), 200


@resume_bp.route('/preview', methods=['POST'])
def preview_resume():
    """
    Render a document under a template.

    Body: {"data": ResumeDocument, "template": "modern"}

    Returns:
        200: {"template", "html", "sections"}
        400: Validation error
    """
    try:
        payload = _parse_render_request()
    except ValidationError as e:
        return error_response("Validation error", 400, {"errors": e.errors(include_url=False, include_context=False)})

    rendered = resume_export_service.render(payload.data, payload.template)
    return jsonify({
        "template": rendered.template.value,
        "html": rendered.html,
        "sections": [key.value for key in rendered.view.section_keys],
    }), 200


@resume_bp.route('/export', methods=['POST'])
def export_resume():
    """
    Export a document as a file.

    POST /api/resumes/export?format=pdf|docx|text

    Returns:
        200: File download
        400: Invalid format or document
        500: Text serialization failed
        503: Capturing the rendered view failed, try again
    """
    export_format = request.args.get('format', 'pdf').lower()
    try:
        format_enum = ExportFormat(export_format)
    except ValueError:
        return error_response(f"Invalid format: {export_format}. Use: pdf, docx, text", 400)

    try:
        payload = _parse_render_request()
    except ValidationError as e:
        return error_response("Validation error", 400, {"errors": e.errors(include_url=False, include_context=False)})

    try:
        artifact = resume_export_service.export(payload.data, format_enum, payload.template)
    except RenderCaptureError as e:
        logger.error(f"PDF export failed: {e}")
        return error_response(e.user_message, 503)
    except ExportSerializationError as e:
        logger.error(f"{format_enum.value} export failed: {e}")
        return error_response(e.user_message, 500)

    return artifact_response(artifact)


@resume_bp.route('', methods=['POST'])
@require_identity
def save_resume():
    """
    Save a resume for the signed-in user.

    Body: {"data": ResumeDocument, "template": "modern", "name"?: str, "resumeId"?: str}

    Returns:
        201: {"resumeId", "persisted": true}
        503: Store unavailable, {"persisted": false}
    """
    try:
        payload = SaveResumeRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return error_response("Validation error", 400, {"errors": e.errors(include_url=False, include_context=False)})

    resume_id = ResumeStoreService.save(
        g.identity,
        payload.data,
        template=payload.template,
        name=payload.name,
        resume_id=payload.resume_id,
    )
    if resume_id is None:
        return error_response("Resume could not be saved", 503, {"persisted": False})

    return jsonify({"resumeId": resume_id, "persisted": True}), 201


@resume_bp.route('', methods=['GET'])
@require_identity
def list_resumes():
    """Saved resumes of the signed-in user."""
    return jsonify({"resumes": ResumeStoreService.list(g.identity.email)}), 200


@resume_bp.route('/<string:resume_id>', methods=['GET'])
@require_identity
def get_resume(resume_id: str):
    """One saved resume with its document."""
    resume = ResumeStoreService.get(g.identity.email, resume_id)
    if resume is None:
        return error_response("Resume not found", 404)
    return jsonify(resume), 200


@resume_bp.route('/<string:resume_id>/analyses', methods=['GET'])
@require_identity
def list_resume_analyses(resume_id: str):
    """Analysis history of one saved resume."""
    return jsonify({
        "analyses": ResumeStoreService.analysis_history(g.identity.email, resume_id)
    }), 200
