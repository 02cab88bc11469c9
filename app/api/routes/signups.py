from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_notification_sink, get_store
from app.enums import EntityKind
from app.schemas import NewsletterSubscriptionCreate, VolunteerCreate, YardSignRequestCreate
from app.services.entities import EntityStore
from app.services.kinds import get_kind
from app.services.notifications import NotificationEvent, NotificationSink, notify
from app.services.validation import ValidationError

router = APIRouter(prefix="/api", tags=["signups"])


def _create_and_notify(
    store: EntityStore,
    sink: NotificationSink,
    kind: EntityKind,
    fields: dict,
) -> dict:
    definition = get_kind(kind)
    try:
        record = store.create(kind, fields)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=f"Error creating {definition.label}: {exc}") from exc
    payload = definition.payload(record)
    notify(sink, NotificationEvent(event_type=definition.event_type, payload=payload))
    return payload


@router.post("/volunteers")
def create_volunteer(
    request: VolunteerCreate,
    store: EntityStore = Depends(get_store),
    sink: NotificationSink = Depends(get_notification_sink),
) -> dict:
    volunteer = _create_and_notify(store, sink, EntityKind.volunteers, request.model_dump())
    return {"success": True, "volunteer": volunteer}


@router.post("/yard-sign-requests")
def create_yard_sign_request(
    request: YardSignRequestCreate,
    store: EntityStore = Depends(get_store),
    sink: NotificationSink = Depends(get_notification_sink),
) -> dict:
    yard_sign = _create_and_notify(store, sink, EntityKind.yard_sign_requests, request.model_dump())
    return {"success": True, "request": yard_sign}


@router.post("/newsletter")
def create_newsletter_subscription(
    request: NewsletterSubscriptionCreate,
    store: EntityStore = Depends(get_store),
    sink: NotificationSink = Depends(get_notification_sink),
) -> dict:
    subscription = _create_and_notify(store, sink, EntityKind.newsletter, request.model_dump())
    return {"success": True, "subscription": subscription}
