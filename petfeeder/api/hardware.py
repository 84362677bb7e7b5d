"""Hardware-facing telemetry endpoint."""

import time
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from petfeeder.schemas.error import ErrorResponseSchema
from petfeeder.schemas.hardware import (
    HardwareUpdateRequestSchema,
    HardwareUpdateResponseSchema,
)
from petfeeder.services.container import ServiceContainer
from petfeeder.services.hardware_service import HardwareService
from petfeeder.services.metrics_service import MetricsService
from petfeeder.utils.device_auth import device_key_required
from petfeeder.utils.error_handling import handle_api_errors
from petfeeder.utils.spectree_config import api

hardware_bp = Blueprint("hardware", __name__, url_prefix="/hardware")


@hardware_bp.route("/update", methods=["POST"])
@device_key_required
@api.validate(
    json=HardwareUpdateRequestSchema,
    resp=SpectreeResponse(
        HTTP_200=HardwareUpdateResponseSchema,
        HTTP_400=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def hardware_update(
    hardware_service: HardwareService = Provide[ServiceContainer.hardware_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Accept a telemetry report from the feeder."""
    start_time = time.perf_counter()
    status = "success"

    try:
        data = HardwareUpdateRequestSchema.model_validate(
            request.get_json(silent=True) or {}
        )
        updated = hardware_service.ingest(
            weight=data.weight,
            battery=data.battery,
            dispensed=data.dispensed,
            feed_type=data.type,
        )

        return HardwareUpdateResponseSchema(
            message="Hardware update received", updated=updated
        ).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("hardware_update", status, duration)
