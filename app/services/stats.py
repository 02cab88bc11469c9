from datetime import datetime, timedelta
from typing import Any

from app.enums import DonationStatus, EntityKind
from app.services.entities import EntityStore
from app.services.utils import as_utc, now_utc


def _created_since(records: list[Any], cutoff: datetime) -> int:
    return sum(1 for record in records if record.created_at is not None and as_utc(record.created_at) > cutoff)


def dashboard_stats(store: EntityStore, now: datetime | None = None) -> dict[str, Any]:
    now = as_utc(now or now_utc())
    volunteers = store.list(EntityKind.volunteers)
    yard_signs = store.list(EntityKind.yard_sign_requests)
    donations = store.list(EntityKind.donations)
    subscriptions = store.list(EntityKind.newsletter)

    succeeded = [donation for donation in donations if donation.status == DonationStatus.succeeded]
    return {
        "generated_at": now,
        "volunteers_total": len(volunteers),
        "volunteers_this_week": _created_since(volunteers, now - timedelta(days=7)),
        "yard_sign_requests_total": len(yard_signs),
        "donations_total_dollars": round(sum(donation.amount for donation in succeeded) / 100, 2),
        "donations_succeeded": len(succeeded),
        "newsletter_total": len(subscriptions),
        "newsletter_this_month": _created_since(subscriptions, now - timedelta(days=30)),
    }
