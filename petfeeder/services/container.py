"""Dependency injection container for services."""

from dependency_injector import containers, providers
from sqlalchemy.orm import sessionmaker

from petfeeder.config import Settings
from petfeeder.services.alert_service import AlertService
from petfeeder.services.auth_service import AuthService
from petfeeder.services.feed_service import FeedService
from petfeeder.services.hardware_service import HardwareService
from petfeeder.services.history_service import HistoryService
from petfeeder.services.maintenance_service import MaintenanceService
from petfeeder.services.metrics_service import MetricsService
from petfeeder.services.schedule_service import ScheduleService
from petfeeder.services.settings_service import SettingsService
from petfeeder.utils.device_auth import DeviceKeyVerifier


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    # Configuration providers
    config = providers.Dependency(instance_of=Settings)
    session_maker = providers.Dependency(instance_of=sessionmaker)
    db_session = providers.ContextLocalSingleton(
        session_maker.provided.call()
    )

    # Stateless singletons
    metrics_service = providers.Singleton(MetricsService)
    device_key_verifier = providers.Singleton(
        DeviceKeyVerifier,
        api_key=config.provided.DEVICE_API_KEY,
    )

    # Per-request services bound to the request's session
    settings_service = providers.Factory(SettingsService, db=db_session)
    history_service = providers.Factory(HistoryService, db=db_session)
    alert_service = providers.Factory(AlertService, db=db_session)
    schedule_service = providers.Factory(ScheduleService, db=db_session)
    auth_service = providers.Factory(AuthService, db=db_session)

    feed_service = providers.Factory(
        FeedService,
        db=db_session,
        config=config,
        settings_service=settings_service,
        history_service=history_service,
        alert_service=alert_service,
    )
    hardware_service = providers.Factory(
        HardwareService,
        settings_service=settings_service,
        history_service=history_service,
        alert_service=alert_service,
    )
    maintenance_service = providers.Factory(
        MaintenanceService,
        db=db_session,
        settings_service=settings_service,
        auth_service=auth_service,
    )
