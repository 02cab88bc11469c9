from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_notification_sink, get_processor, get_store
from app.config import Settings, get_settings
from app.enums import EntityKind, NotificationEventType
from app.schemas import DonationOutcomeRequest, PaymentIntentRequest, PaymentIntentResponse
from app.services.entities import EntityStore
from app.services.kinds import get_kind
from app.services.notifications import NotificationEvent, NotificationSink, notify
from app.services.payments import PaymentProcessor, record_donation_outcome, start_donation
from app.services.validation import NotFoundError, ProcessorError, ValidationError

router = APIRouter(prefix="/api", tags=["payments"])


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
def create_payment_intent(
    request: PaymentIntentRequest,
    settings: Settings = Depends(get_settings),
    store: EntityStore = Depends(get_store),
    processor: PaymentProcessor = Depends(get_processor),
    sink: NotificationSink = Depends(get_notification_sink),
) -> PaymentIntentResponse:
    if not settings.payments_enabled:
        raise HTTPException(status_code=503, detail="Payments are not enabled")
    if not request.amount or not request.email:
        raise HTTPException(status_code=400, detail="Amount and email are required")
    try:
        donation, charge = start_donation(
            store,
            processor,
            email=request.email,
            amount_dollars=request.amount,
            currency=settings.payment_currency,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ProcessorError as exc:
        raise HTTPException(status_code=502, detail=f"Error creating payment intent: {exc}") from exc

    notify(
        sink,
        NotificationEvent(
            event_type=NotificationEventType.donation,
            payload=get_kind(EntityKind.donations).payload(donation),
        ),
    )
    return PaymentIntentResponse(clientSecret=charge.client_handle, donationId=donation.id)


@router.post("/donations/{donation_id}/outcome")
def confirm_donation(
    donation_id: int,
    request: DonationOutcomeRequest,
    store: EntityStore = Depends(get_store),
) -> dict[str, Any]:
    try:
        donation = record_donation_outcome(store, donation_id, request.status.value)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return get_kind(EntityKind.donations).payload(donation)
