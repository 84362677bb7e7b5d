"""Flask application factory for the pet feeder backend."""

import logging
from typing import TYPE_CHECKING, Any

from flask import g
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

if TYPE_CHECKING:
    from petfeeder.config import Settings

from petfeeder.app import App
from petfeeder.config import get_settings
from petfeeder.extensions import db
from petfeeder.services.container import ServiceContainer


def create_app(settings: "Settings | None" = None) -> App:
    """Create and configure Flask application."""
    app = App(__name__)

    # Load configuration
    if settings is None:
        settings = get_settings()

    # Validate production configuration
    settings.validate_production_config()

    app.config.from_mapping(settings.to_flask_config())

    # Initialize Flask-SQLAlchemy
    db.init_app(app)

    # Import models to register them with SQLAlchemy
    from petfeeder import models  # noqa: F401

    # Initialize SessionLocal for per-request sessions
    # This needs to be done in app context since db.engine requires it
    with app.app_context():
        from sqlalchemy.orm import Session, sessionmaker

        SessionLocal: sessionmaker[Session] = sessionmaker(
            class_=Session,
            bind=db.engine,
            autoflush=True,
            expire_on_commit=False,
        )

    # Initialize SpecTree for OpenAPI docs
    from petfeeder.utils.spectree_config import configure_spectree

    configure_spectree(app)

    # Initialize service container
    container = ServiceContainer()
    container.config.override(settings)
    container.session_maker.override(SessionLocal)

    # Wire container with API modules
    wire_modules = [
        "petfeeder.api",
        "petfeeder.api.alerts",
        "petfeeder.api.auth",
        "petfeeder.api.feed",
        "petfeeder.api.hardware",
        "petfeeder.api.history",
        "petfeeder.api.metrics",
        "petfeeder.api.schedules",
        "petfeeder.api.settings",
    ]

    container.wire(modules=wire_modules)

    app.container = container

    # Configure CORS; the dashboard sends the session cookie cross-origin
    CORS(app, origins=settings.CORS_ORIGINS, supports_credentials=True)

    # Configure logging
    debug_mode = settings.FLASK_ENV in ("development", "testing")
    logging.basicConfig(
        level=logging.DEBUG if debug_mode else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Register main API blueprint
    from petfeeder.api import api_bp

    app.register_blueprint(api_bp)

    # Register metrics blueprint (at root, not under /api)
    from petfeeder.api.metrics import metrics_bp

    app.register_blueprint(metrics_bp)

    _register_error_handlers(app)

    # Request teardown handler for database session management
    @app.teardown_request
    def close_session(exc: BaseException | None) -> None:
        """Commit or roll back the request's database session, then close it."""
        try:
            db_session = container.db_session()
            needs_rollback = g.pop("needs_rollback", False)

            if exc or needs_rollback:
                db_session.rollback()
            else:
                db_session.commit()

            db_session.close()

        finally:
            # Ensure the scoped session is removed after each request
            container.db_session.reset()

    return app


def _register_error_handlers(app: App) -> None:
    """Answer errors raised outside the views with the API error envelope."""
    from petfeeder.utils.error_handling import build_error_response, mark_request_failed

    logger = logging.getLogger(__name__)

    @app.errorhandler(404)
    def not_found(error: HTTPException) -> Any:
        return build_error_response("Endpoint not found", status_code=404)

    @app.errorhandler(405)
    def method_not_allowed(error: HTTPException) -> Any:
        return build_error_response("Method not allowed", status_code=405)

    @app.errorhandler(500)
    def internal_error(error: Exception) -> Any:
        logger.error("Unhandled error: %s", error, exc_info=True)
        mark_request_failed()
        return build_error_response("Internal server error", status_code=500)
