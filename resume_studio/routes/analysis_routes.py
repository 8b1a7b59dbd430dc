"""
Analysis Routes
AI resume analysis against an optional job description
"""
import logging

from flask import Blueprint, current_app, g, jsonify, request
from pydantic import ValidationError

from resume_studio import limiter
from resume_studio.middleware.identity import optional_identity
from resume_studio.routes import error_response
from resume_studio.schemas.analysis_schema import AnalyzeResumeRequest
from resume_studio.services.resume_analysis_service import (
    AnalysisServiceError,
    AnalysisUnavailableError,
    resume_analysis_service,
)
from resume_studio.services.resume_store_service import ResumeStoreService

logger = logging.getLogger(__name__)

analysis_bp = Blueprint('analysis', __name__, url_prefix='/api')


def _analysis_rate_limit() -> str:
    return current_app.config.get("ANALYSIS_RATE_LIMIT", "10 per minute")


@analysis_bp.route('/analyze-resume', methods=['POST'])
@limiter.limit(_analysis_rate_limit)
@optional_identity
def analyze_resume():
    """
    Analyze a resume.

    Body: {"resumeText": str, "jobDescription"?: str, "resumeId"?: str}

    Returns:
        200: {"kind": "parsed", "analysis": {...}} or {"kind": "unparsed", "rawResponse": str}
        400: Resume text missing
        429: Rate limit exceeded
        502: Model call failed
        503: Model not configured or temporarily blocked
    """
    try:
        data = AnalyzeResumeRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return error_response("Resume text is required", 400, {"errors": e.errors(include_url=False, include_context=False)})

    try:
        result = resume_analysis_service.analyze(data.resume_text, data.job_description)
    except AnalysisUnavailableError as e:
        return error_response(str(e), 503)
    except AnalysisServiceError as e:
        return error_response(str(e), 502)

    response = result.to_response()

    if g.identity is not None and data.resume_id:
        recorded = ResumeStoreService.record_analysis(
            g.identity, data.resume_id, result.kind, response
        )
        response["recorded"] = recorded

    return jsonify(response), 200
