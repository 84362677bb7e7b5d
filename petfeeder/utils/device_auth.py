"""Device authentication for hardware-facing endpoints."""

import hmac
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class DeviceKeyVerifier:
    """Checks the shared secret the feeder presents on every request.

    Comparison is constant-time.
    """

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("Device API key must not be empty")
        self._api_key = api_key.encode("utf-8")

    def verify(self, presented: str | None) -> bool:
        """Return True if ``presented`` matches the configured key."""
        if not presented:
            logger.debug("Device request without API key")
            return False
        matches = hmac.compare_digest(presented.encode("utf-8"), self._api_key)
        if not matches:
            logger.debug("Device request with wrong API key")
        return matches


def device_key_required(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to mark an endpoint as reserved for the feeder.

    Such endpoints skip the session check and require the device key header
    instead.

    Usage:
        @hardware_bp.route("/update", methods=["POST"])
        @device_key_required
        def hardware_update():
            ...
    """
    func.requires_device_key = True  # type: ignore[attr-defined]
    return func


def is_device_endpoint(func: Callable[..., Any] | None) -> bool:
    """Check whether a view function was marked with @device_key_required."""
    return bool(func and getattr(func, "requires_device_key", False))
