"""Authentication endpoints for the dashboard session."""

import time
from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from spectree import Response as SpectreeResponse

from petfeeder.schemas.auth import (
    ChangePasswordRequestSchema,
    LoginRequestSchema,
    LoginResponseSchema,
    SessionResponseSchema,
    UserSchema,
)
from petfeeder.schemas.error import ErrorResponseSchema, MessageResponseSchema
from petfeeder.services.auth_service import AuthService
from petfeeder.services.container import ServiceContainer
from petfeeder.services.metrics_service import MetricsService
from petfeeder.utils.auth import (
    end_session,
    get_auth_context,
    get_session_user,
    public,
    start_session,
)
from petfeeder.utils.error_handling import handle_api_errors
from petfeeder.utils.spectree_config import api

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.route("/login", methods=["POST"])
@public
@api.validate(
    json=LoginRequestSchema,
    resp=SpectreeResponse(
        HTTP_200=LoginResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_401=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def login(
    auth_service: AuthService = Provide[ServiceContainer.auth_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Log in with username and password and start a session."""
    start_time = time.perf_counter()
    status = "success"

    try:
        data = LoginRequestSchema.model_validate(request.get_json(silent=True) or {})
        auth_context = auth_service.authenticate(data.username, data.password)
        start_session(auth_context)

        return LoginResponseSchema(
            message="Login successful",
            user=UserSchema(id=auth_context.user_id, username=auth_context.username),
        ).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("login", status, duration)


@auth_bp.route("/logout", methods=["POST"])
@public
@api.validate(resp=SpectreeResponse(HTTP_200=MessageResponseSchema))
@handle_api_errors
@inject
def logout(
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """End the current session."""
    start_time = time.perf_counter()
    status = "success"

    try:
        end_session()
        return MessageResponseSchema(message="Logged out successfully").model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("logout", status, duration)


@auth_bp.route("/session", methods=["GET"])
@public
@api.validate(resp=SpectreeResponse(HTTP_200=SessionResponseSchema))
@handle_api_errors
@inject
def get_session(
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Report whether the caller is logged in."""
    start_time = time.perf_counter()
    status = "success"

    try:
        auth_context = get_session_user()
        if auth_context is None:
            return SessionResponseSchema(authenticated=False).model_dump(exclude_none=True)

        return SessionResponseSchema(
            authenticated=True,
            user=UserSchema(id=auth_context.user_id, username=auth_context.username),
        ).model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("get_session", status, duration)


@auth_bp.route("/change-password", methods=["POST"])
@api.validate(
    json=ChangePasswordRequestSchema,
    resp=SpectreeResponse(
        HTTP_200=MessageResponseSchema,
        HTTP_400=ErrorResponseSchema,
        HTTP_401=ErrorResponseSchema,
        HTTP_404=ErrorResponseSchema,
    )
)
@handle_api_errors
@inject
def change_password(
    auth_service: AuthService = Provide[ServiceContainer.auth_service],
    metrics_service: MetricsService = Provide[ServiceContainer.metrics_service],
) -> Any:
    """Change the logged-in user's password."""
    start_time = time.perf_counter()
    status = "success"

    try:
        data = ChangePasswordRequestSchema.model_validate(
            request.get_json(silent=True) or {}
        )
        auth_context = get_auth_context()
        assert auth_context is not None  # guaranteed by before_request

        auth_service.change_password(
            auth_context.user_id, data.old_password, data.new_password
        )

        return MessageResponseSchema(message="Password updated successfully").model_dump()

    except Exception:
        status = "error"
        raise

    finally:
        duration = time.perf_counter() - start_time
        metrics_service.record_operation("change_password", status, duration)
