import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from app.enums import NotificationEventType
from app.services.utils import format_dollars

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationEvent:
    event_type: NotificationEventType
    payload: dict[str, Any] = field(default_factory=dict)


class NotificationSink(Protocol):
    def send(self, event: NotificationEvent) -> None:
        ...


class LoggingNotificationSink:
    def send(self, event: NotificationEvent) -> None:
        subject, content = compose_message(event.event_type, event.payload)
        logger.info("Campaign notification [%s] %s: %s", event.event_type.value, subject, content)
        logger.debug("Notification payload: %s", json.dumps(event.payload, default=str, sort_keys=True))


class NullNotificationSink:
    def send(self, event: NotificationEvent) -> None:
        return None


def compose_message(event_type: NotificationEventType | str, data: dict[str, Any]) -> tuple[str, str]:
    event_type = NotificationEventType(event_type)
    if event_type == NotificationEventType.volunteer:
        interests = ", ".join(data.get("interests") or [])
        return f"New Volunteer: {data.get('name', '')}", (
            f"{data.get('name', '')} ({data.get('email', '')}) signed up to volunteer for: {interests}"
        )
    if event_type == NotificationEventType.yard_sign:
        return f"New Yard Sign Request: {data.get('name', '')}", (
            f"{data.get('name', '')} ({data.get('email', '')}) requested {data.get('quantity', 1)} "
            f"yard sign(s) for: {data.get('address', '')}"
        )
    if event_type == NotificationEventType.donation:
        amount = format_dollars(int(data.get("amount") or 0))
        return f"New Donation: {amount}", f"Donation of {amount} from {data.get('email', '')}"
    return "New Newsletter Subscriber", f"{data.get('email', '')} subscribed to campaign updates"


def notify(sink: NotificationSink, event: NotificationEvent) -> bool:
    """Deliver an event on a best-effort basis; failures are logged, never raised."""
    try:
        sink.send(event)
    except Exception as exc:
        logger.warning("Notification delivery failed for %s: %s", event.event_type.value, exc)
        return False
    return True
