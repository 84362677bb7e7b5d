"""Health check endpoint for liveness probes."""

from typing import Any

from flask import Blueprint, jsonify
from spectree import Response as SpectreeResponse

from petfeeder.database import check_db_connection
from petfeeder.schemas.health import HealthResponseSchema
from petfeeder.utils.auth import public
from petfeeder.utils.spectree_config import api

health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.route("", methods=["GET"])
@public
@api.validate(
    resp=SpectreeResponse(HTTP_200=HealthResponseSchema, HTTP_503=HealthResponseSchema)
)
def health_check() -> Any:
    """Health check endpoint.

    Returns 200 when the database is accessible, 503 otherwise.
    """
    db_connected = check_db_connection()

    response = {
        "status": "healthy" if db_connected else "unhealthy",
        "database": "connected" if db_connected else "disconnected",
    }

    if not db_connected:
        response["error"] = "database not connected"

    return jsonify(response), 200 if db_connected else 503
