"""Alert feed endpoint."""

import time
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint
from spectree import Response as SpectreeResponse

from petfeeder.config import Settings
from petfeeder.schemas.alert import AlertListResponseSchema, AlertSchema
from petfeeder.services.alert_service import AlertService
from petfeeder.services.container import ServiceContainer
from petfeeder.services.metrics_service import MetricsService
from petfeeder.utils.error_handling import handle_api_errors
from petfeeder.utils.spectree_config import api

alerts_bp = Blueprint("alerts", __name__, url_prefix="/alerts")


@alerts_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=AlertListResponseSchema))
@handle_api_errors
@inject
def list_alerts(
    alert_service: AlertService = Provide[ServiceContainer.alert_service],
    config: Settings = Provide[ServiceContainer.config],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Return the most recent alerts, newest first."""
    start_time = time.perf_counter()
    status = "success"

    try:
        alerts = alert_service.list_recent(config.ALERT_LIST_LIMIT)
        return AlertListResponseSchema(
            alerts=[AlertSchema.model_validate(a) for a in alerts]
        ).model_dump(mode="json")

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("list_alerts", status, duration)
