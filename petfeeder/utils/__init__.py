"""Utility modules for the pet feeder backend."""

import uuid

from flask import g, has_request_context, request

CORRELATION_ID_HEADER = "X-Correlation-ID"


def get_current_correlation_id() -> str:
    """Get or generate a correlation ID for the current request.

    Uses the client's X-Correlation-ID header when present and keeps the
    value on flask.g so every error in one request reports the same ID.

    Returns:
        A correlation ID string
    """
    if not has_request_context():
        return str(uuid.uuid4())

    correlation_id = getattr(g, "correlation_id", None)
    if correlation_id is None:
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
        g.correlation_id = correlation_id
    return correlation_id
