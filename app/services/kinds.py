from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from operator import attrgetter
from typing import Any

from app.enums import EntityKind, NotificationEventType
from app.models.base import Base
from app.models.core import Donation, NewsletterSubscription, Volunteer, YardSignRequest
from app.services.exports import ColumnSpec
from app.services.utils import snake_case
from app.services.validation import ValidationError

Accessor = Callable[[Any], Any]

IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def _accessors(*names: str) -> dict[str, Accessor]:
    return {name: attrgetter(name) for name in ("id", "created_at", *names)}


def _to_json_safe(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_to_json_safe(nested) for nested in value]
    return value


@dataclass(frozen=True)
class KindDefinition:
    kind: EntityKind
    model: type[Base]
    label: str
    event_type: NotificationEventType
    accessors: Mapping[str, Accessor]
    search_fields: tuple[str, ...]
    export_columns: tuple[ColumnSpec, ...]
    export_base_name: str
    editable_fields: frozenset[str]
    aliases: Mapping[str, str] = field(default_factory=dict)

    def resolve_field(self, name: str) -> str | None:
        key = snake_case(name)
        key = self.aliases.get(key, key)
        return key if key in self.accessors else None

    def require_field(self, name: str) -> str:
        resolved = self.resolve_field(name)
        if resolved is None:
            raise ValidationError(f"Unsupported field for {self.kind.value}: {name}")
        return resolved

    def resolve_columns(self, columns: list[ColumnSpec]) -> list[ColumnSpec]:
        return [ColumnSpec(column.display_name, self.require_field(column.field_key)) for column in columns]

    def payload(self, record: Any) -> dict[str, Any]:
        return {name: _to_json_safe(accessor(record)) for name, accessor in self.accessors.items()}


_DEFINITIONS: dict[EntityKind, KindDefinition] = {
    EntityKind.volunteers: KindDefinition(
        kind=EntityKind.volunteers,
        model=Volunteer,
        label="volunteer",
        event_type=NotificationEventType.volunteer,
        accessors=_accessors("name", "email", "phone", "interests"),
        search_fields=("name", "email", "phone"),
        export_columns=(
            ColumnSpec("Name", "name"),
            ColumnSpec("Email", "email"),
            ColumnSpec("Phone", "phone"),
            ColumnSpec("Interests", "interests"),
            ColumnSpec("CreatedAt", "created_at"),
        ),
        export_base_name="volunteers",
        editable_fields=frozenset({"name", "email", "phone", "interests"}),
    ),
    EntityKind.yard_sign_requests: KindDefinition(
        kind=EntityKind.yard_sign_requests,
        model=YardSignRequest,
        label="yard sign request",
        event_type=NotificationEventType.yard_sign,
        accessors=_accessors("name", "email", "phone", "address", "quantity"),
        search_fields=("name", "email", "address"),
        export_columns=(
            ColumnSpec("Name", "name"),
            ColumnSpec("Email", "email"),
            ColumnSpec("Phone", "phone"),
            ColumnSpec("Address", "address"),
            ColumnSpec("Quantity", "quantity"),
            ColumnSpec("CreatedAt", "created_at"),
        ),
        export_base_name="yard-sign-requests",
        editable_fields=frozenset({"name", "email", "phone", "address", "quantity"}),
    ),
    EntityKind.donations: KindDefinition(
        kind=EntityKind.donations,
        model=Donation,
        label="donation",
        event_type=NotificationEventType.donation,
        accessors=_accessors("email", "amount", "status", "payment_reference"),
        search_fields=("email",),
        export_columns=(
            ColumnSpec("Email", "email"),
            ColumnSpec("Amount", "amount"),
            ColumnSpec("Status", "status"),
            ColumnSpec("PaymentReference", "payment_reference"),
            ColumnSpec("CreatedAt", "created_at"),
        ),
        export_base_name="donations",
        editable_fields=frozenset({"status", "payment_reference"}),
        aliases={"stripe_payment_intent_id": "payment_reference"},
    ),
    EntityKind.newsletter: KindDefinition(
        kind=EntityKind.newsletter,
        model=NewsletterSubscription,
        label="newsletter subscription",
        event_type=NotificationEventType.newsletter,
        accessors=_accessors("email"),
        search_fields=("email",),
        export_columns=(
            ColumnSpec("Email", "email"),
            ColumnSpec("CreatedAt", "created_at"),
        ),
        export_base_name="newsletter-subscribers",
        editable_fields=frozenset({"email"}),
    ),
}


def get_kind(kind: EntityKind | str) -> KindDefinition:
    try:
        return _DEFINITIONS[EntityKind(kind)]
    except ValueError as exc:
        raise ValidationError(f"Unsupported entity kind: {kind}") from exc


def all_kinds() -> list[KindDefinition]:
    return list(_DEFINITIONS.values())
