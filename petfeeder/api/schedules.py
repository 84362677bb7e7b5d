"""Feeding schedule endpoints."""

import time
from datetime import datetime
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from petfeeder.schemas.error import ErrorResponseSchema, MessageResponseSchema
from petfeeder.schemas.schedule import (
    DueScheduleListResponseSchema,
    DueScheduleSchema,
    ScheduleCreatedResponseSchema,
    ScheduleIdSchema,
    ScheduleListQuerySchema,
    ScheduleListResponseSchema,
    ScheduleRequestSchema,
    ScheduleResponseSchema,
)
from petfeeder.services.container import ServiceContainer
from petfeeder.services.metrics_service import MetricsService
from petfeeder.services.schedule_service import ScheduleService
from petfeeder.utils.device_auth import device_key_required
from petfeeder.utils.error_handling import handle_api_errors
from petfeeder.utils.spectree_config import api

schedules_bp = Blueprint("schedules", __name__, url_prefix="/schedules")


@schedules_bp.route("", methods=["GET"])
@api.validate(
    query=ScheduleListQuerySchema,
    resp=SpectreeResponse(
        HTTP_200=ScheduleListResponseSchema,
        HTTP_400=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def list_schedules(
    schedule_service: ScheduleService = Provide[ServiceContainer.schedule_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """List schedules, newest first. Inactive ones only on request."""
    start_time = time.perf_counter()
    status = "success"

    try:
        query = ScheduleListQuerySchema.model_validate(request.args.to_dict())
        schedules = schedule_service.list_schedules(
            include_inactive=query.include_inactive
        )

        return ScheduleListResponseSchema(
            schedules=[ScheduleResponseSchema.model_validate(s) for s in schedules]
        ).model_dump(by_alias=True)

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("list_schedules", status, duration)


@schedules_bp.route("/active", methods=["GET"])
@device_key_required
@api.validate(resp=SpectreeResponse(HTTP_200=DueScheduleListResponseSchema))
@handle_api_errors
@inject
def list_due_schedules(
    schedule_service: ScheduleService = Provide[ServiceContainer.schedule_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """List the schedules that apply today, for the feeder to poll.

    Only the day rule is applied; the device compares start_time against
    its own clock.
    """
    start_time = time.perf_counter()
    status = "success"

    try:
        now = datetime.now()
        schedules = schedule_service.get_due_schedules(now)

        return DueScheduleListResponseSchema(
            schedules=[DueScheduleSchema.model_validate(s) for s in schedules],
            current_time=now.strftime("%H:%M:%S"),
        ).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("list_due_schedules", status, duration)


@schedules_bp.route("", methods=["POST"])
@api.validate(
    json=ScheduleRequestSchema,
    resp=SpectreeResponse(
        HTTP_201=ScheduleCreatedResponseSchema,
        HTTP_400=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def create_schedule(
    schedule_service: ScheduleService = Provide[ServiceContainer.schedule_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Create a schedule."""
    start_time = time.perf_counter()
    status = "success"

    try:
        data = ScheduleRequestSchema.model_validate(request.get_json(silent=True) or {})
        schedule = schedule_service.create_schedule(
            interval=data.interval,
            start_time=data.time,
            rounds=data.rounds,
            frequency=data.frequency,
            custom_days=data.custom_days,
            is_active=True if data.active is None else data.active,
        )

        return ScheduleCreatedResponseSchema(
            message="Schedule created successfully", id=schedule.id
        ).model_dump(), 201

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("create_schedule", status, duration)


@schedules_bp.route("/<schedule_id>", methods=["PUT"])
@api.validate(
    json=ScheduleRequestSchema,
    resp=SpectreeResponse(
        HTTP_200=MessageResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def update_schedule(
    schedule_id: str,
    schedule_service: ScheduleService = Provide[ServiceContainer.schedule_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Replace a schedule's fields."""
    start_time = time.perf_counter()
    status = "success"

    try:
        path = ScheduleIdSchema.model_validate({"id": schedule_id})
        data = ScheduleRequestSchema.model_validate(request.get_json(silent=True) or {})
        schedule_service.update_schedule(
            path.id,
            interval=data.interval,
            start_time=data.time,
            rounds=data.rounds,
            frequency=data.frequency,
            custom_days=data.custom_days,
            is_active=data.active,
        )

        return MessageResponseSchema(message="Schedule updated successfully").model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("update_schedule", status, duration)


@schedules_bp.route("/<schedule_id>", methods=["DELETE"])
@api.validate(
    resp=SpectreeResponse(
        HTTP_200=MessageResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def delete_schedule(
    schedule_id: str,
    schedule_service: ScheduleService = Provide[ServiceContainer.schedule_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Delete a schedule."""
    start_time = time.perf_counter()
    status = "success"

    try:
        path = ScheduleIdSchema.model_validate({"id": schedule_id})
        schedule_service.delete_schedule(path.id)

        return MessageResponseSchema(message="Schedule deleted successfully").model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("delete_schedule", status, duration)
