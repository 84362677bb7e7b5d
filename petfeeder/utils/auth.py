"""Session authentication utilities for dashboard endpoints."""

import logging
from collections.abc import Callable
from typing import Any

from flask import g, session

from petfeeder.services.auth_service import AuthContext

logger = logging.getLogger(__name__)

SESSION_USER_ID = "user_id"
SESSION_USERNAME = "username"


def public(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to mark an endpoint as publicly accessible (no authentication required).

    Usage:
        @some_bp.route("/health")
        @public
        def health_check():
            return {"status": "healthy"}
    """
    func.is_public = True  # type: ignore[attr-defined]
    return func


def is_public_endpoint(func: Callable[..., Any] | None) -> bool:
    """Check whether a view function was marked with @public."""
    return bool(func and getattr(func, "is_public", False))


def get_auth_context() -> AuthContext | None:
    """Get the current authentication context from flask.g.

    Returns:
        AuthContext if user is authenticated, None otherwise
    """
    return getattr(g, "auth_context", None)


def get_session_user() -> AuthContext | None:
    """Read the logged-in user from the signed session cookie."""
    user_id = session.get(SESSION_USER_ID)
    if user_id is None:
        return None
    return AuthContext(user_id=int(user_id), username=session.get(SESSION_USERNAME, ""))


def start_session(auth_context: AuthContext) -> None:
    """Store the user in a fresh permanent session."""
    session.clear()
    session[SESSION_USER_ID] = auth_context.user_id
    session[SESSION_USERNAME] = auth_context.username
    session.permanent = True


def end_session() -> None:
    """Forget the logged-in user."""
    session.clear()


def authenticate_request() -> bool:
    """Authenticate the current request from its session.

    Stores the AuthContext in flask.g on success.

    Returns:
        True if the session carries a logged-in user
    """
    auth_context = get_session_user()
    if auth_context is None:
        return False

    g.auth_context = auth_context
    logger.debug("Request authenticated: user=%s", auth_context.username)
    return True
