"""Feeding history endpoint."""

import time
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from petfeeder.schemas.error import ErrorResponseSchema
from petfeeder.schemas.history import (
    HistoryEntrySchema,
    HistoryListResponseSchema,
    HistoryQuerySchema,
)
from petfeeder.services.container import ServiceContainer
from petfeeder.services.history_service import HistoryService
from petfeeder.services.metrics_service import MetricsService
from petfeeder.utils.error_handling import handle_api_errors
from petfeeder.utils.spectree_config import api

history_bp = Blueprint("history", __name__, url_prefix="/history")


@history_bp.route("", methods=["GET"])
@api.validate(
    query=HistoryQuerySchema,
    resp=SpectreeResponse(
        HTTP_200=HistoryListResponseSchema,
        HTTP_400=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def list_history(
    history_service: HistoryService = Provide[ServiceContainer.history_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Search the feeding history, newest first."""
    start_time = time.perf_counter()
    status = "success"

    try:
        query = HistoryQuerySchema.model_validate(request.args.to_dict())
        entries = history_service.list_history(search=query.search, limit=query.limit)

        return HistoryListResponseSchema(
            history=[HistoryEntrySchema.model_validate(e) for e in entries]
        ).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("list_history", status, duration)
