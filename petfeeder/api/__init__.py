"""API blueprints for the pet feeder backend."""

import logging
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, current_app, request

from petfeeder.consts import DEVICE_API_KEY_HEADER
from petfeeder.services.container import ServiceContainer
from petfeeder.utils.auth import authenticate_request, is_public_endpoint
from petfeeder.utils.device_auth import DeviceKeyVerifier, is_device_endpoint

logger = logging.getLogger(__name__)

# Create main API blueprint
api_bp = Blueprint("api", __name__, url_prefix="/api")


@api_bp.before_request
@inject
def before_request_authentication(
    device_key_verifier: DeviceKeyVerifier = Provide[ServiceContainer.device_key_verifier],
) -> None | tuple[dict[str, Any], int]:
    """Authenticate all requests to /api endpoints before processing.

    Endpoints marked with @public are open. Endpoints marked with
    @device_key_required need the feeder's API key header. Everything else
    needs a logged-in dashboard session.

    Returns:
        None if authentication succeeds or is skipped
        Error response tuple if authentication fails
    """
    # Get the actual view function from Flask's view_functions
    endpoint = request.endpoint
    actual_func = current_app.view_functions.get(endpoint) if endpoint else None

    # Unknown routes fall through to the 404 handler; preflights carry no credentials
    if actual_func is None or request.method == "OPTIONS" or is_public_endpoint(actual_func):
        return None

    if is_device_endpoint(actual_func):
        if device_key_verifier.verify(request.headers.get(DEVICE_API_KEY_HEADER)):
            return None
        logger.warning("Rejected device request to %s %s", request.method, request.path)
        return {"success": False, "message": "Unauthorized"}, 401

    if authenticate_request():
        return None

    logger.warning(
        "Unauthenticated request to %s %s", request.method, request.path
    )
    return {"success": False, "message": "Authentication required"}, 401


# Import and register all resource blueprints
# Note: Imports are done after api_bp creation to avoid circular imports
from petfeeder.api.alerts import alerts_bp  # noqa: E402
from petfeeder.api.auth import auth_bp  # noqa: E402
from petfeeder.api.feed import feed_bp  # noqa: E402
from petfeeder.api.hardware import hardware_bp  # noqa: E402
from petfeeder.api.health import health_bp  # noqa: E402
from petfeeder.api.history import history_bp  # noqa: E402
from petfeeder.api.schedules import schedules_bp  # noqa: E402
from petfeeder.api.settings import settings_bp  # noqa: E402

api_bp.register_blueprint(alerts_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(auth_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(feed_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(hardware_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(health_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(history_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(schedules_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(settings_bp)  # type: ignore[attr-defined]
