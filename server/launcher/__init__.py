# server/launcher/__init__.py

import uuid
import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify, request, g
from flask_cors import CORS
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .config import Config
from .extensions import db, migrate, limiter
from .services.storage import AppStorage, StorageError, create_storage
from .utils.responses import ApiResponse

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_app(config_class=Config, storage: Optional[AppStorage] = None):
    """Create and configure the Flask application"""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    initialize_extensions(app)

    app.api_response = ApiResponse()
    app.storage = storage or create_storage(app.config.get("STORAGE_BACKEND"))

    # Initialize database in app context
    with app.app_context():
        initialize_database(app)

    # Register middleware
    register_middleware(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register root endpoints
    register_root_endpoints(app)

    logger.info(f"Application initialized in {app.config.get('FLASK_ENV', 'production')} mode")

    return app


def initialize_extensions(app):
    """Initialize Flask extensions"""
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        if app.config.get("STORAGE_BACKEND") == "database":
            raise RuntimeError(
                "Database connection details are required (either DATABASE_URL or POSTGRES_* variables)"
            )
        # Memory storage still needs a bound engine for the extension to load
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        # Pool sizing and driver arguments only apply to the configured database server
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {}

    # Database
    db.init_app(app)
    migrate.init_app(app, db)

    # Rate limiting
    limiter.init_app(app)

    # Remove duplicates and None values
    cors_origins = list(filter(None, list(dict.fromkeys(app.config.get("CORS_ORIGINS", [])))))

    CORS(app,
         resources={r"/api/*": {"origins": cors_origins}},
         allow_headers=['Content-Type', 'X-Requested-With'],
         methods=['GET', 'POST', 'DELETE', 'OPTIONS', 'PATCH'],
         max_age=3600)

    logger.info(f"CORS initialized with origins: {cors_origins}")


def initialize_database(app):
    """Create the apps table when the database backend is active"""
    if app.config.get("STORAGE_BACKEND") != "database":
        logger.info("Database storage disabled - skipping table creation")
        return

    from .models import AppEntry  # noqa: F401

    try:
        db.create_all()

        tables = inspect(db.engine).get_table_names()
        if "apps" not in tables:
            raise RuntimeError("Required table 'apps' is missing")

        logger.info("Database tables created/verified")

    except (SQLAlchemyError, RuntimeError) as e:
        logger.error(f"Database initialization error: {e}", exc_info=True)
        if app.config.get('FLASK_ENV') == 'production':
            # In production, database is critical
            raise


def register_middleware(app):
    """Register application middleware"""

    @app.before_request
    def assign_request_id():
        """Assign a unique ID to each request for tracking"""
        g.request_id = request.headers.get('X-Request-ID', str(uuid.uuid4()))

        if app.config.get('FLASK_ENV') == 'development':
            logger.debug(f"{request.method} {request.path} from {request.remote_addr}")

    @app.after_request
    def after_request(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        # Only add HSTS in production with HTTPS
        if app.config.get('FLASK_ENV') == 'production' and request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        request_id = getattr(g, 'request_id', None)
        if request_id:
            response.headers['X-Request-ID'] = request_id

        return response


def register_blueprints(app):
    """Register all application blueprints"""
    from .routes import apps_bp, pages_bp

    app.register_blueprint(apps_bp, url_prefix='/api/apps')
    logger.info("Apps blueprint registered at /api/apps")

    app.register_blueprint(pages_bp)


def register_error_handlers(app):
    """Register error handlers for the application"""

    @app.errorhandler(400)
    def bad_request(error):
        logger.warning(f"Bad request: {error}")
        return app.api_response.error(
            str(error.description) if hasattr(error, 'description') else 'Invalid request',
            400,
            'BAD_REQUEST'
        )

    @app.errorhandler(403)
    def forbidden(error):
        return app.api_response.error('You do not have permission to access this resource', 403, 'FORBIDDEN')

    @app.errorhandler(404)
    def not_found(error):
        return app.api_response.error('The requested resource was not found', 404, 'NOT_FOUND')

    @app.errorhandler(405)
    def method_not_allowed(error):
        return app.api_response.error(
            f'The {request.method} method is not allowed for this endpoint', 405, 'METHOD_NOT_ALLOWED'
        )

    @app.errorhandler(429)
    def rate_limit_exceeded(error):
        return app.api_response.error('Rate limit exceeded. Please try again later', 429, 'RATE_LIMITED')

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}", exc_info=True)
        return app.api_response.error('An unexpected error occurred. Please try again later.', 500)

    @app.errorhandler(StorageError)
    def storage_error(error):
        logger.error(f"Storage error: {error}", exc_info=True)
        return app.api_response.error('Storage is temporarily unavailable', 500, 'STORAGE_ERROR')

    @app.errorhandler(Exception)
    def unhandled_exception(error):
        if isinstance(error, HTTPException):
            return app.api_response.error(error.description, error.code)

        logger.error(f"Unhandled exception: {error}", exc_info=True)

        # Don't expose internal errors in production
        if app.config.get('FLASK_ENV') == 'production':
            return app.api_response.error('An unexpected error occurred', 500)

        return app.api_response.error(str(error), 500, type(error).__name__)


def register_root_endpoints(app):
    """Register root-level endpoints"""

    @app.route('/health')
    def health_check():
        """Liveness probe; never touches storage"""
        return jsonify({
            'status': 'ok',
            'timestamp': utc_timestamp()
        }), 200

    @app.route('/ready')
    def readiness_check():
        """Readiness check for deployment platforms (K8s, etc)"""
        checks = {'storage': False}

        try:
            app.storage.ping()
            checks['storage'] = True
        except StorageError as e:
            logger.error(f"Readiness check - storage failed: {e}")

        is_ready = all(checks.values())

        return jsonify({
            'ready': is_ready,
            'service': 'launcher',
            'storage_backend': type(app.storage).__name__,
            'timestamp': utc_timestamp(),
            'checks': checks
        }), 200 if is_ready else 503
