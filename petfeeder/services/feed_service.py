"""Feed service: manual dispense and sensor recalibration."""

import logging
from dataclasses import dataclass

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petfeeder.config import Settings
from petfeeder.exceptions import ProcessingException
from petfeeder.models.alert import AlertType
from petfeeder.models.history import FeedStatus, FeedType
from petfeeder.models.setting import Setting
from petfeeder.services.alert_service import AlertService
from petfeeder.services.device_state import (
    KEY_CURRENT_WEIGHT,
    KEY_LAST_CALIBRATION,
    format_timestamp,
    parse_int,
    utcnow,
)
from petfeeder.services.history_service import HistoryService
from petfeeder.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

# Compare-and-set attempts before giving up on a contended weight row
MAX_WEIGHT_UPDATE_ATTEMPTS = 3


@dataclass
class DispenseResult:
    """Outcome of a dispense request."""

    success: bool
    current_weight: int


class FeedService:
    """Service for changing the hopper weight on behalf of the user.

    Dispensing is a read-check-write on the CURRENT_WEIGHT setting. Two
    concurrent requests must not both subtract from the same observed
    weight, so the row is read with SELECT ... FOR UPDATE where the backend
    supports it and written back with a compare-and-set that only succeeds
    if the value is still the one that was checked. A lost race re-reads
    and re-checks.
    """

    def __init__(
        self,
        db: Session,
        config: Settings,
        settings_service: SettingsService,
        history_service: HistoryService,
        alert_service: AlertService,
    ) -> None:
        """Initialize feed service.

        Args:
            db: SQLAlchemy database session
            config: Application settings (thresholds)
            settings_service: Key-value settings access
            history_service: Feed ledger
            alert_service: Alert log
        """
        self.db = db
        self.config = config
        self.settings_service = settings_service
        self.history_service = history_service
        self.alert_service = alert_service

    def dispense(
        self, rounds: int, feed_type: str, weight_dispensed: int
    ) -> DispenseResult:
        """Dispense feed if the hopper holds enough.

        On insufficient stock the weight is left untouched and a failed
        history row plus an error alert are recorded. On success the weight
        is reduced by exactly ``weight_dispensed`` and the feed is recorded,
        with an extra warning when the remaining stock drops below the low
        feed threshold.

        Args:
            rounds: Rounds requested
            feed_type: History type (Manual or Scheduled)
            weight_dispensed: Grams the dispense removes from the hopper

        Returns:
            DispenseResult with the resulting (or unchanged) weight

        Raises:
            ProcessingException: If the weight kept changing underneath
        """
        for attempt in range(1, MAX_WEIGHT_UPDATE_ATTEMPTS + 1):
            observed = self._read_weight_for_update()
            current_weight = parse_int(observed)

            if current_weight < weight_dispensed:
                self._record_failure(rounds, feed_type)
                logger.info(
                    "Dispense of %d rounds (%dg) refused: only %dg remaining",
                    rounds,
                    weight_dispensed,
                    current_weight,
                )
                return DispenseResult(success=False, current_weight=current_weight)

            new_weight = current_weight - weight_dispensed
            if self._compare_and_set_weight(observed, new_weight):
                break

            logger.warning(
                "Weight changed during dispense (attempt %d/%d), retrying",
                attempt,
                MAX_WEIGHT_UPDATE_ATTEMPTS,
            )
        else:
            raise ProcessingException(
                "dispense feed", "the hopper weight kept changing concurrently"
            )

        try:
            self._record_success(rounds, feed_type, new_weight)
        except SQLAlchemyError:
            logger.error(
                "Weight set to %dg but recording the dispense failed; "
                "history and alerts diverge until the transaction is rolled back",
                new_weight,
                exc_info=True,
            )
            raise

        logger.info(
            "Dispensed %d rounds (%dg), %dg remaining",
            rounds,
            weight_dispensed,
            new_weight,
        )
        return DispenseResult(success=True, current_weight=new_weight)

    def recalibrate(self) -> int:
        """Reset the hopper weight and stamp the calibration time.

        Returns:
            The weight after recalibration
        """
        weight = self.config.RECALIBRATION_WEIGHT

        self.settings_service.set(KEY_CURRENT_WEIGHT, str(weight))
        self.settings_service.set(KEY_LAST_CALIBRATION, format_timestamp(utcnow()))

        self.history_service.record(0, FeedType.RECALIBRATE, FeedStatus.SUCCESS)
        self.alert_service.create_alert(
            AlertType.INFO, f"Sensor recalibrated. Weight reset to {weight}g."
        )

        logger.info("Sensor recalibrated, weight reset to %dg", weight)
        return weight

    def _read_weight_for_update(self) -> str | None:
        """Read the raw weight value, locking the row until commit."""
        stmt = (
            select(Setting.value)
            .where(Setting.key == KEY_CURRENT_WEIGHT)
            .with_for_update()
        )
        return self.db.scalars(stmt).first()

    def _compare_and_set_weight(self, observed: str | None, new_weight: int) -> bool:
        """Write the new weight only if the stored value is still ``observed``.

        Returns:
            True if the write happened
        """
        if observed is None:
            # No row yet; nothing to race against
            self.settings_service.set(KEY_CURRENT_WEIGHT, str(new_weight))
            return True

        stmt = (
            update(Setting)
            .where(Setting.key == KEY_CURRENT_WEIGHT, Setting.value == observed)
            .values(value=str(new_weight), updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return result.rowcount == 1

    def _record_failure(self, rounds: int, feed_type: str) -> None:
        self.history_service.record(rounds, feed_type, FeedStatus.FAILED_LOW_FEED)
        self.alert_service.create_alert(
            AlertType.ERROR, f"Dispense failed: Insufficient feed for {rounds} rounds."
        )

    def _record_success(self, rounds: int, feed_type: str, new_weight: int) -> None:
        self.history_service.record(rounds, feed_type, FeedStatus.SUCCESS)
        self.alert_service.create_alert(
            AlertType.INFO, f"Successfully dispensed {rounds} rounds."
        )

        threshold = self.config.LOW_FEED_WARNING_THRESHOLD
        if new_weight < threshold:
            self.alert_service.create_alert(
                AlertType.WARNING, f"Feed supply critically low (<{threshold}g)."
            )
