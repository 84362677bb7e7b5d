"""Device settings, status and factory reset endpoints."""

import time
from datetime import timedelta
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint
from spectree import Response as SpectreeResponse

from petfeeder.config import Settings
from petfeeder.schemas.error import MessageResponseSchema
from petfeeder.schemas.settings import (
    DeviceStatusResponseSchema,
    DeviceStatusSchema,
    SettingsResponseSchema,
)
from petfeeder.services.container import ServiceContainer
from petfeeder.services.device_state import derive_status, utcnow
from petfeeder.services.maintenance_service import MaintenanceService
from petfeeder.services.metrics_service import MetricsService
from petfeeder.services.settings_service import SettingsService
from petfeeder.utils.error_handling import handle_api_errors
from petfeeder.utils.spectree_config import api

settings_bp = Blueprint("settings", __name__, url_prefix="/settings")


@settings_bp.route("", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=SettingsResponseSchema))
@handle_api_errors
@inject
def get_settings(
    settings_service: SettingsService = Provide[ServiceContainer.settings_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Return every stored setting as raw text."""
    start_time = time.perf_counter()
    status = "success"

    try:
        return SettingsResponseSchema(settings=settings_service.get_all()).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("get_settings", status, duration)


@settings_bp.route("/status", methods=["GET"])
@api.validate(resp=SpectreeResponse(HTTP_200=DeviceStatusResponseSchema))
@handle_api_errors
@inject
def get_status(
    settings_service: SettingsService = Provide[ServiceContainer.settings_service],
    config: Settings = Provide[ServiceContainer.config],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Return the derived device status.

    The device counts as online only while its heartbeat is fresh, whatever
    the stored connection flag says.
    """
    start_time = time.perf_counter()
    status = "success"

    try:
        device_status = derive_status(
            settings_service.load_state(),
            now=utcnow(),
            staleness_window=timedelta(seconds=config.HEARTBEAT_STALENESS_SECONDS),
        )

        return DeviceStatusResponseSchema(
            status=DeviceStatusSchema.model_validate(device_status)
        ).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("get_status", status, duration)


@settings_bp.route("/factory-reset", methods=["POST"])
@api.validate(resp=SpectreeResponse(HTTP_200=MessageResponseSchema))
@handle_api_errors
@inject
def factory_reset(
    maintenance_service: MaintenanceService = Provide[ServiceContainer.maintenance_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Wipe schedules, history and alerts and restore default settings."""
    start_time = time.perf_counter()
    status = "success"

    try:
        maintenance_service.factory_reset()
        return MessageResponseSchema(message="Factory reset complete").model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("factory_reset", status, duration)
