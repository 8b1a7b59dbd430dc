"""Flask application factory and initialization."""

import logging
from typing import Type

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config.base import BaseConfig

__version__ = "0.1.0"

# Initialize extensions
db = SQLAlchemy()
cors = CORS()
limiter = Limiter(key_func=get_remote_address)


def setup_logging(app: Flask, log_format: str = "json") -> None:
    """Setup logging configuration for the application."""
    log_level = app.config.get("LOG_LEVEL", "INFO")

    handler = logging.StreamHandler()
    if log_format == "json":
        # Structured JSON logging
        from pythonjsonlogger import jsonlogger

        handler.setFormatter(jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        ))
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        ))

    # app.logger is the "resume_studio" logger, module loggers are its children
    app.logger.handlers = [handler]
    app.logger.setLevel(getattr(logging, log_level))

    # Log application startup information
    app.logger.info(
        "Application initialized",
        extra={
            "environment": app.config.get("ENV", "development"),
            "debug": app.debug,
            "testing": app.testing,
        }
    )


def setup_redis(app: Flask) -> None:
    """Point the shared Redis connection manager at the configured URL."""
    from resume_studio.utils.redis_client import redis_manager

    redis_url = app.config.get("REDIS_URL")
    # Production must not silently lose editor sessions to a process-local store
    redis_manager.configure(redis_url, allow_fallback=app.config.get("ENV") != "production")
    app.logger.info(f"Redis configured: {redis_url or 'in-process fakeredis'}")


def setup_error_handlers(app: Flask) -> None:
    """Register error handlers."""

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return {
            "error": "Not Found",
            "message": "The requested resource was not found",
            "status": 404,
        }, 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        app.logger.error(f"Internal server error: {error}")
        return {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "status": 500,
        }, 500

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 errors."""
        return {
            "error": "Method Not Allowed",
            "message": "The HTTP method is not allowed for this resource",
            "status": 405,
        }, 405

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 errors."""
        return {
            "error": "Bad Request",
            "message": "The request was invalid",
            "status": 400,
        }, 400

    @app.errorhandler(429)
    def rate_limited(error):
        """Handle 429 errors."""
        return {
            "error": "Too Many Requests",
            "message": "Rate limit exceeded. Please try again later.",
            "status": 429,
        }, 429


def register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""
    from resume_studio.routes import api
    from resume_studio.routes import resume_routes
    from resume_studio.routes import analysis_routes
    from resume_studio.routes import editor_routes

    # Health check and info
    app.register_blueprint(api.bp)

    # Templates, preview, export and saved resumes
    app.register_blueprint(resume_routes.resume_bp)

    # AI analysis
    app.register_blueprint(analysis_routes.analysis_bp)

    # Editor sessions
    app.register_blueprint(editor_routes.editor_bp)


def create_app(config: Type[BaseConfig] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        config: Configuration class to use. If None, uses environment-based config.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Load configuration
    if config is None:
        from config.settings import settings

        if settings.is_production:
            from config.production import ProductionConfig
            config = ProductionConfig
        elif settings.is_testing:
            from config.testing import TestingConfig
            config = TestingConfig
        else:
            from config.development import DevelopmentConfig
            config = DevelopmentConfig

    app.config.from_object(config)

    # Setup logging
    setup_logging(app, app.config.get("LOG_FORMAT", "json"))

    # Initialize extensions
    db.init_app(app)
    limiter.init_app(app)

    cors.init_app(app, resources={
        r"/api/*": {
            "origins": app.config.get("CORS_ORIGINS", ["*"]),
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": app.config.get("CORS_ALLOW_HEADERS", ["*"]),
            "expose_headers": app.config.get("CORS_EXPOSE_HEADERS", ["Content-Disposition"]),
            "supports_credentials": app.config.get("CORS_SUPPORTS_CREDENTIALS", True),
        }
    })

    # Setup Redis
    setup_redis(app)

    # Request logging and JSON content-type checks
    from resume_studio.middleware import register_middleware
    register_middleware(app)

    # Setup error handlers
    setup_error_handlers(app)

    # Register blueprints
    register_blueprints(app)

    # Models must be imported before tables can be created
    from resume_studio import models  # noqa: F401

    # Log application info
    app.logger.info(
        "Flask application created",
        extra={
            "config": config.__name__,
            "database": app.config.get("SQLALCHEMY_DATABASE_URI", "").split("://")[0],
        }
    )

    return app
