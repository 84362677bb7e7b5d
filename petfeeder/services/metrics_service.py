"""Prometheus metrics recorded by the API layer."""

import logging

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

logger = logging.getLogger(__name__)


class MetricsService:
    """Owns the application's Prometheus metrics.

    Metrics are created lazily on first use so that test fixtures can clear
    the default registry between app instances.
    """

    content_type = CONTENT_TYPE_LATEST

    def _ensure_metrics(self) -> None:
        """Lazily initialize Prometheus metrics."""
        if hasattr(self, "_metrics_initialized"):
            return
        self._metrics_initialized = True

        self.operations_total = Counter(
            "petfeeder_operations_total",
            "Total API operations",
            ["operation", "status"],
        )
        self.operation_duration_seconds = Histogram(
            "petfeeder_operation_duration_seconds",
            "Duration of API operations in seconds",
            ["operation"],
        )
        self.dispensed_grams_total = Counter(
            "petfeeder_dispensed_grams_total",
            "Grams of feed dispensed through the API",
        )

    def record_operation(
        self, operation: str, status: str, duration: float | None = None
    ) -> None:
        """Record an API operation."""
        self._ensure_metrics()
        try:
            self.operations_total.labels(operation=operation, status=status).inc()
            if duration is not None:
                self.operation_duration_seconds.labels(operation=operation).observe(
                    duration
                )
        except Exception as e:
            logger.error("Error recording operation metric: %s", e)

    def record_dispensed(self, grams: int) -> None:
        """Count grams removed from the hopper by a successful dispense."""
        self._ensure_metrics()
        try:
            self.dispensed_grams_total.inc(grams)
        except Exception as e:
            logger.error("Error recording dispense metric: %s", e)

    def get_metrics_text(self) -> bytes:
        """Render all registered metrics in the Prometheus text format."""
        self._ensure_metrics()
        return generate_latest()
