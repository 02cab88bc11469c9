from fastapi import Depends
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.database import get_db
from app.services.bulk import BulkActionDispatcher
from app.services.entities import EntityStore
from app.services.notifications import LoggingNotificationSink, NotificationSink, NullNotificationSink
from app.services.payments import PaymentProcessor, build_processor

DBSession = Depends(get_db)
AppSettings = Depends(get_settings)


def get_store(db: Session = DBSession) -> EntityStore:
    return EntityStore(db)


def get_dispatcher(store: EntityStore = Depends(get_store)) -> BulkActionDispatcher:
    return BulkActionDispatcher(store)


def get_processor(settings: Settings = AppSettings) -> PaymentProcessor:
    return build_processor(settings)


def get_notification_sink(settings: Settings = AppSettings) -> NotificationSink:
    if settings.notifications_enabled:
        return LoggingNotificationSink()
    return NullNotificationSink()
