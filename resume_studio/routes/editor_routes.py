"""
Editor Routes
Server-side editing sessions for the resume builder wizard
"""
import logging
from functools import wraps

from flask import Blueprint, current_app, g, jsonify, request
from pydantic import ValidationError

from resume_studio.middleware.identity import require_identity
from resume_studio.routes import artifact_response, error_response
from resume_studio.schemas.editor_schema import (
    AppendEntryRequest,
    CreateSessionRequest,
    ExportSessionRequest,
    FieldChangesRequest,
    GoToStepRequest,
    SaveSessionRequest,
    SelectTemplateRequest,
    parse_section,
)
from resume_studio.schemas.resume_export_schema import ExportFormat
from resume_studio.services.export import (
    ExportSerializationError,
    RenderCaptureError,
    resume_export_service,
)
from resume_studio.services.resume_editor_service import (
    EditorSessionStore,
    EntryNotFoundError,
    ExportInProgressError,
    ResumeEditor,
    ResumeValidationError,
    SessionNotFoundError,
)
from resume_studio.services.resume_store_service import ResumeStoreService

logger = logging.getLogger(__name__)

editor_bp = Blueprint('editor', __name__, url_prefix='/api/editor/sessions')


def get_session_store() -> EditorSessionStore:
    return EditorSessionStore(ttl_seconds=current_app.config.get("EDITOR_SESSION_TTL_SECONDS", 86400))


def with_editor(f):
    """
    Load the session named in the URL into ``g.editor`` and save it back
    after a successful (2xx) response.
    """
    @wraps(f)
    def decorated_function(session_id: str, *args, **kwargs):
        store = get_session_store()
        try:
            g.editor = store.load(session_id)
        except SessionNotFoundError as e:
            return error_response(str(e), 404)

        try:
            response = f(*args, **kwargs)
        except ValidationError as e:
            return error_response("Validation error", 400, {"errors": e.errors(include_url=False, include_context=False)})
        except EntryNotFoundError as e:
            return error_response(str(e), 404)
        except ValueError as e:
            return error_response(str(e), 400)

        status = response[1] if isinstance(response, tuple) else response.status_code
        if 200 <= status < 300:
            store.save(g.editor)
        return response

    return decorated_function


def _body(schema):
    return schema.model_validate(request.get_json(silent=True) or {})


# ==================== Sessions ====================

@editor_bp.route('', methods=['POST'])
def create_session():
    """
    Start an editing session.

    Body: {"data"?: ResumeDocument, "template"?: str}
    Without data the document is scaffolded with one empty entry per section.

    Returns:
        201: Session state
    """
    try:
        payload = _body(CreateSessionRequest)
    except ValidationError as e:
        return error_response("Validation error", 400, {"errors": e.errors(include_url=False, include_context=False)})

    editor = get_session_store().create(document=payload.data, template=payload.template)
    return jsonify(editor.to_dict()), 201


@editor_bp.route('/<string:session_id>', methods=['GET'])
@with_editor
def get_session():
    return jsonify(g.editor.to_dict()), 200


@editor_bp.route('/<string:session_id>', methods=['DELETE'])
def delete_session(session_id: str):
    get_session_store().delete(session_id)
    return '', 204


# ==================== Personal info ====================

@editor_bp.route('/<string:session_id>/personal-info', methods=['PATCH'])
@with_editor
def update_personal_info():
    """Body: {"changes": {"firstName": "Jane", ...}}"""
    payload = _body(FieldChangesRequest)
    info = g.editor.update_personal_info(payload.changes)
    return jsonify({"personalInfo": info.model_dump(mode="json", by_alias=True)}), 200


# ==================== Entries ====================

@editor_bp.route('/<string:session_id>/sections/<string:section>', methods=['POST'])
@with_editor
def append_entry(section: str):
    """Body: {"values"?: {...}}. The new entry always gets a fresh id."""
    payload = _body(AppendEntryRequest)
    entry = g.editor.append_entry(parse_section(section), payload.values)
    return jsonify({"entry": entry.model_dump(mode="json", by_alias=True)}), 201


@editor_bp.route('/<string:session_id>/sections/<string:section>/<string:entry_id>', methods=['PATCH'])
@with_editor
def update_entry(section: str, entry_id: str):
    """Body: {"changes": {...}}"""
    payload = _body(FieldChangesRequest)
    entry = g.editor.update_entry(parse_section(section), entry_id, payload.changes)
    return jsonify({"entry": entry.model_dump(mode="json", by_alias=True)}), 200


@editor_bp.route('/<string:session_id>/sections/<string:section>/<string:entry_id>/duplicate', methods=['POST'])
@with_editor
def duplicate_entry(section: str, entry_id: str):
    entry = g.editor.duplicate_entry(parse_section(section), entry_id)
    return jsonify({"entry": entry.model_dump(mode="json", by_alias=True)}), 201


@editor_bp.route('/<string:session_id>/sections/<string:section>/<string:entry_id>', methods=['DELETE'])
@with_editor
def remove_entry(section: str, entry_id: str):
    g.editor.remove_entry(parse_section(section), entry_id)
    return jsonify(g.editor.to_dict()), 200


# ==================== Steps ====================

@editor_bp.route('/<string:session_id>/step', methods=['PUT'])
@with_editor
def go_to_step():
    """Body: {"step": 3} or {"step": "experience"}. Never blocked by validation."""
    payload = _body(GoToStepRequest)
    g.editor.go_to_step(payload.step)
    return jsonify(g.editor.to_dict()), 200


@editor_bp.route('/<string:session_id>/step/next', methods=['POST'])
@with_editor
def next_step():
    g.editor.next_step()
    return jsonify(g.editor.to_dict()), 200


@editor_bp.route('/<string:session_id>/step/previous', methods=['POST'])
@with_editor
def previous_step():
    g.editor.previous_step()
    return jsonify(g.editor.to_dict()), 200


# ==================== Template, preview, validation ====================

@editor_bp.route('/<string:session_id>/template', methods=['PUT'])
@with_editor
def select_template():
    """Body: {"template": "classic"}. Unknown ids fall back to modern."""
    payload = _body(SelectTemplateRequest)
    template = g.editor.select_template(payload.template)
    return jsonify({"template": template.value}), 200


@editor_bp.route('/<string:session_id>/preview', methods=['GET'])
@with_editor
def preview():
    rendered = g.editor.render()
    return jsonify({
        "template": rendered.template.value,
        "html": rendered.html,
        "sections": [key.value for key in rendered.view.section_keys],
    }), 200


@editor_bp.route('/<string:session_id>/validate', methods=['GET'])
@with_editor
def validate():
    """Per-field errors; an empty object means the document can be submitted."""
    errors = g.editor.validate()
    return jsonify({"valid": not errors, "errors": errors}), 200


@editor_bp.route('/<string:session_id>/save', methods=['POST'])
@require_identity
@with_editor
def save():
    """
    Submit the document: validate, then save it for the signed-in user.

    Returns:
        201: {"resumeId", "persisted": true}
        422: Per-field validation errors
        503: Store unavailable
    """
    payload = _body(SaveSessionRequest)
    try:
        document = g.editor.validate_for_submission()
    except ResumeValidationError as e:
        return error_response(str(e), 422, {"errors": e.errors})

    resume_id = ResumeStoreService.save(
        g.identity,
        document,
        template=g.editor.template.value,
        name=payload.name,
        resume_id=payload.resume_id,
    )
    if resume_id is None:
        return error_response("Resume could not be saved", 503, {"persisted": False})
    return jsonify({"resumeId": resume_id, "persisted": True}), 201


# ==================== Export ====================

@editor_bp.route('/<string:session_id>/export', methods=['POST'])
@with_editor
def export():
    """
    Export the session's document.

    Body: {"format": "pdf"|"docx"|"text"}

    Returns:
        200: File download
        409: An export of this session is still running
        500: Text serialization failed
        503: Capturing the rendered view failed, try again
    """
    payload = _body(ExportSessionRequest)
    try:
        format_enum = ExportFormat(payload.format.lower())
    except ValueError:
        return error_response(f"Invalid format: {payload.format}. Use: pdf, docx, text", 400)

    store = get_session_store()
    editor: ResumeEditor = g.editor
    try:
        with store.export_lock(
            editor.session_id,
            ttl_seconds=current_app.config.get("EXPORT_LOCK_TTL_SECONDS", 60),
        ):
            artifact = resume_export_service.export(editor.document, format_enum, editor.template.value)
    except ExportInProgressError as e:
        return error_response(str(e), 409)
    except RenderCaptureError as e:
        logger.error(f"PDF export failed for session {editor.session_id}: {e}")
        return error_response(e.user_message, 503)
    except ExportSerializationError as e:
        logger.error(f"{format_enum.value} export failed for session {editor.session_id}: {e}")
        return error_response(e.user_message, 500)

    return artifact_response(artifact)
