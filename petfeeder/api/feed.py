"""Manual feed endpoints: dispense and recalibrate."""

import time
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from petfeeder.exceptions import InsufficientFeedException
from petfeeder.schemas.error import ErrorResponseSchema
from petfeeder.schemas.feed import (
    DispenseRequestSchema,
    DispenseResponseSchema,
    RecalibrateResponseSchema,
)
from petfeeder.services.container import ServiceContainer
from petfeeder.services.feed_service import FeedService
from petfeeder.services.metrics_service import MetricsService
from petfeeder.utils.error_handling import handle_api_errors
from petfeeder.utils.spectree_config import api

feed_bp = Blueprint("feed", __name__, url_prefix="/feed")


@feed_bp.route("/dispense", methods=["POST"])
@api.validate(
    json=DispenseRequestSchema,
    resp=SpectreeResponse(
        HTTP_200=DispenseResponseSchema,
        HTTP_400=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def dispense(
    feed_service: FeedService = Provide[ServiceContainer.feed_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Dispense feed if the hopper holds enough.

    A refused dispense still records a failed history row and an error
    alert before answering 400 with the remaining weight.
    """
    start_time = time.perf_counter()
    status = "success"

    try:
        data = DispenseRequestSchema.model_validate(request.get_json(silent=True) or {})
        result = feed_service.dispense(data.rounds, data.type, data.weight_dispensed)

        if not result.success:
            raise InsufficientFeedException(result.current_weight)

        metrics_service.record_dispensed(data.weight_dispensed)
        return DispenseResponseSchema(
            message=(
                f"Successfully dispensed {data.rounds} rounds "
                f"({data.weight_dispensed}g)."
            ),
            current_weight=result.current_weight,
        ).model_dump(by_alias=True)

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("dispense", status, duration)


@feed_bp.route("/recalibrate", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_200=RecalibrateResponseSchema))
@handle_api_errors
@inject
def recalibrate(
    feed_service: FeedService = Provide[ServiceContainer.feed_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Reset the hopper weight after the sensor has been recalibrated."""
    start_time = time.perf_counter()
    status = "success"

    try:
        weight = feed_service.recalibrate()
        return RecalibrateResponseSchema(current_weight=weight).model_dump(by_alias=True)

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("recalibrate", status, duration)
