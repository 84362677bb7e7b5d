"""SpecTree configuration with Pydantic v2 compatibility."""

from typing import Any

from flask import Flask, redirect
from spectree import SpecTree

from petfeeder.consts import API_DESCRIPTION, API_TITLE
from petfeeder.utils.error_handling import build_error_response

# Global Spectree instance that can be imported by API modules.
# This will be initialized by configure_spectree() before any imports of the API modules.
api: SpecTree = None  # type: ignore


def _validation_error_envelope(
    req: Any, resp: Any, req_validation_error: Any, instance: Any
) -> None:
    """Rewrite spectree's request validation failure into the API error envelope."""
    if req_validation_error is None or resp is None:
        return

    errors = [
        {
            "field": ".".join(str(x) for x in error["loc"]),
            "message": error["msg"],
        }
        for error in req_validation_error.errors()
    ]

    body, status_code = build_error_response(
        "Validation failed",
        code="VALIDATION_FAILED",
        errors=errors,
    )
    resp.set_data(body.get_data())
    resp.mimetype = "application/json"
    resp.status_code = status_code


def configure_spectree(app: Flask) -> SpecTree:
    """Configure Spectree and register the documentation routes.

    Returns:
        SpecTree: Configured Spectree instance
    """
    global api

    api = SpecTree(
        backend_name="flask",
        title=API_TITLE,
        version="1.0.0",
        description=API_DESCRIPTION,
        path="api/docs",  # OpenAPI docs available at /api/docs
        validation_error_status=400,
        before=_validation_error_envelope,
    )

    api.register(app)

    @app.route("/api/docs")
    @app.route("/api/docs/")
    def docs_redirect() -> Any:
        return redirect("/api/docs/swagger/", code=302)

    return api
