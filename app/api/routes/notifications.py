from fastapi import APIRouter, Depends

from app.api.deps import get_notification_sink
from app.schemas import NotificationRequest, NotificationResponse
from app.services.notifications import NotificationEvent, NotificationSink, compose_message, notify

router = APIRouter(prefix="/api", tags=["notifications"])


@router.post("/send-notification", response_model=NotificationResponse)
def send_notification(
    request: NotificationRequest,
    sink: NotificationSink = Depends(get_notification_sink),
) -> NotificationResponse:
    subject, content = compose_message(request.type, request.data)
    notify(sink, NotificationEvent(event_type=request.type, payload=request.data))
    return NotificationResponse(subject=subject, content=content)
