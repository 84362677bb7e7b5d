"""Metrics API for Prometheus scraping endpoint."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, Response

from petfeeder.services.container import ServiceContainer
from petfeeder.services.metrics_service import MetricsService
from petfeeder.utils.error_handling import handle_api_errors

metrics_bp = Blueprint("metrics", __name__)


@metrics_bp.route("/metrics", methods=["GET"])
@handle_api_errors
@inject
def get_metrics(
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Return metrics in Prometheus text format.

    Returns:
        Response with metrics data in Prometheus exposition format
    """
    metrics_text = metrics_service.get_metrics_text()

    return Response(metrics_text, content_type=metrics_service.content_type)
