import logging
from dataclasses import dataclass
from typing import Any, Protocol
from uuid import uuid4

import stripe

from app.config import Settings
from app.enums import DonationStatus, EntityKind
from app.models.core import Donation
from app.services.entities import EntityStore
from app.services.utils import dollars_to_cents
from app.services.validation import ProcessorError, parse_donation_status, require, validate_amount_minor_units

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingCharge:
    client_handle: str
    processor_reference: str


class PaymentProcessor(Protocol):
    def create_pending_charge(self, amount_minor_units: int, currency: str, metadata: dict[str, str]) -> PendingCharge:
        ...


class StripePaymentProcessor:
    def __init__(self, secret_key: str) -> None:
        self.secret_key = secret_key

    def create_pending_charge(self, amount_minor_units: int, currency: str, metadata: dict[str, str]) -> PendingCharge:
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.secret_key,
                amount=amount_minor_units,
                currency=currency,
                metadata=metadata,
            )
        except stripe.StripeError as exc:
            raise ProcessorError(f"Failed to create payment intent: {exc}") from exc
        return PendingCharge(client_handle=intent.client_secret, processor_reference=intent.id)


class MockPaymentProcessor:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.charges: list[dict[str, Any]] = []

    def create_pending_charge(self, amount_minor_units: int, currency: str, metadata: dict[str, str]) -> PendingCharge:
        if self.fail:
            raise ProcessorError("Mock processor rejected the charge")
        reference = f"pi_mock_{uuid4().hex[:16]}"
        self.charges.append({"amount": amount_minor_units, "currency": currency, "metadata": metadata})
        return PendingCharge(client_handle=f"{reference}_secret_{uuid4().hex[:8]}", processor_reference=reference)


def build_processor(settings: Settings) -> PaymentProcessor:
    if settings.use_mock_payments:
        return MockPaymentProcessor()
    return StripePaymentProcessor(settings.stripe_secret_key)


def start_donation(
    store: EntityStore,
    processor: PaymentProcessor,
    *,
    email: str,
    amount_dollars: float,
    currency: str,
) -> tuple[Donation, PendingCharge]:
    amount = dollars_to_cents(amount_dollars)
    validate_amount_minor_units(amount)
    require(bool(email.strip()), "email is required")

    donation = store.create(EntityKind.donations, {"email": email, "amount": amount})
    try:
        charge = processor.create_pending_charge(
            amount,
            currency,
            {"donationId": str(donation.id), "email": email},
        )
    except ProcessorError:
        logger.warning("Payment processor failed for donation %s", donation.id)
        store.update(EntityKind.donations, donation.id, {"status": DonationStatus.failed})
        raise

    donation = store.update(EntityKind.donations, donation.id, {"payment_reference": charge.processor_reference})
    return donation, charge


def record_donation_outcome(store: EntityStore, donation_id: int, status: str) -> Donation:
    outcome = parse_donation_status(status)
    require(outcome != DonationStatus.pending, "Donation outcome must be succeeded or failed")
    return store.update(EntityKind.donations, donation_id, {"status": outcome})
