"""
Dependency injection for the vessel bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into services via constructor injection.
These are the composition root for the vessel context:
engine → repository → predicate builder → read service → write service.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.engine import Engine

from fleet.application.vessel.read_service import VesselReadService
from fleet.application.vessel.write_service import VesselWriteService
from fleet.core.config import settings
from fleet.domain.vessel.ports import NotificationPort, VesselRepository
from fleet.domain.vessel.predicate_builder import VesselPredicateBuilder
from fleet.infrastructure.database import create_database_engine
from fleet.infrastructure.vessel.notification_adapter import (
    BackgroundNotificationDispatcher,
    LoggingNotificationAdapter,
    WebhookNotificationAdapter,
)
from fleet.infrastructure.vessel.vessel_repository import VesselRepositoryAdapter

_predicate_builder = VesselPredicateBuilder()


@lru_cache
def get_engine() -> Engine:
    """Build the SQLAlchemy engine from application settings, once."""
    return create_database_engine(settings.get_database_dsn())


@lru_cache
def get_notifier() -> BackgroundNotificationDispatcher:
    """Build the notification dispatcher from application settings, once."""
    if settings.notification_webhook_url:
        delegate: NotificationPort = WebhookNotificationAdapter(
            settings.notification_webhook_url,
            timeout=settings.notification_timeout,
        )
    else:
        delegate = LoggingNotificationAdapter()
    return BackgroundNotificationDispatcher(
        delegate, max_workers=settings.notification_workers
    )


def get_vessel_repository(engine: Engine = Depends(get_engine)) -> VesselRepository:
    """Build the vessel repository on the shared engine."""
    return VesselRepositoryAdapter(engine=engine)


def get_read_service(
    repository: VesselRepository = Depends(get_vessel_repository),
) -> VesselReadService:
    """Build VesselReadService with its infrastructure dependencies."""
    return VesselReadService(
        repository=repository,
        predicate_builder=_predicate_builder,
    )


def get_write_service(
    repository: VesselRepository = Depends(get_vessel_repository),
    read_service: VesselReadService = Depends(get_read_service),
    notifier: NotificationPort = Depends(get_notifier),
) -> VesselWriteService:
    """Build VesselWriteService with its infrastructure dependencies."""
    return VesselWriteService(
        repository=repository,
        read_service=read_service,
        notifier=notifier,
    )
