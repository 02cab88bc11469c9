from datetime import datetime
from types import SimpleNamespace

from app.enums import EntityKind
from app.models.core import Volunteer


def volunteer_payload(name: str = "Jane Doe", email: str = "jane@example.com", **extra) -> dict:
    payload = {"name": name, "email": email, "phone": None, "interests": ["Phone Banking"]}
    payload.update(extra)
    return payload


def make_volunteer_row(record_id: int, name: str, created_at: datetime | None = None, **extra) -> SimpleNamespace:
    fields = {
        "id": record_id,
        "created_at": created_at,
        "name": name,
        "email": f"{name.lower().replace(' ', '.')}@example.com",
        "phone": None,
        "interests": [],
    }
    fields.update(extra)
    return SimpleNamespace(**fields)


def seed_volunteers(store, *names: str) -> list[Volunteer]:
    return [
        store.create(EntityKind.volunteers, volunteer_payload(name=name, email=f"{name.split()[0].lower()}@example.com"))
        for name in names
    ]


def insert_with_timestamp(db, record, created_at: datetime):
    record.created_at = created_at
    db.add(record)
    db.commit()
    return record
