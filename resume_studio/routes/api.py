"""API routes for the application."""

import time
from datetime import datetime

from flask import Blueprint, jsonify, current_app
from sqlalchemy import text

from resume_studio import db, __version__
from resume_studio.schemas import (
    HealthCheckSchema,
    AppInfoSchema,
)
from resume_studio.services.resume_analysis_service import resume_analysis_service
from resume_studio.utils.redis_client import redis_manager

bp = Blueprint("api", __name__, url_prefix="/api")

STARTED_AT = time.monotonic()


def _database_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
        return "connected"
    except Exception as e:
        current_app.logger.error(f"Database health check failed: {e}")
        db.session.rollback()
        return "disconnected"


@bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    services = {
        "database": _database_status(),
        "redis": redis_manager.status(),
        "ai": "available" if resume_analysis_service.is_available else "unavailable",
    }
    schema = HealthCheckSchema(
        status="healthy",
        timestamp=datetime.utcnow(),
        environment=current_app.config.get("ENV", "development"),
        version=__version__,
        uptime=round(time.monotonic() - STARTED_AT, 3),
        services=services,
    )
    return jsonify(schema.model_dump(mode="json")), 200


@bp.route("/info", methods=["GET"])
def app_info():
    """Get application information."""
    schema = AppInfoSchema(
        name="Resume Studio Server",
        version=__version__,
        environment=current_app.config.get("ENV", "development"),
        debug=current_app.debug,
        timestamp=datetime.utcnow(),
    )
    return jsonify(schema.model_dump(mode="json")), 200


@bp.route("/", methods=["GET"])
def root():
    """Root API endpoint."""
    return jsonify({
        "message": "Welcome to Resume Studio API",
        "version": __version__,
        "endpoints": {
            "health": "/api/health",
            "info": "/api/info",
            "templates": "/api/resumes/templates",
            "preview": "/api/resumes/preview",
            "export": "/api/resumes/export",
            "resumes": "/api/resumes",
            "analyze": "/api/analyze-resume",
            "editor": "/api/editor/sessions",
        },
    }), 200
