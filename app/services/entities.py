from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.enums import EntityKind
from app.models.base import Base
from app.services.kinds import IMMUTABLE_FIELDS, KindDefinition, get_kind
from app.services.validation import (
    NotFoundError,
    ValidationError,
    parse_donation_status,
    require,
    validate_amount_minor_units,
    validate_quantity,
)


def _coerce_field(name: str, value: Any) -> Any:
    if name == "status" and value is not None:
        return parse_donation_status(value.value if hasattr(value, "value") else str(value))
    if name == "quantity" and value is not None:
        validate_quantity(int(value))
        return int(value)
    if name == "amount":
        require(value is not None, "amount is required")
        validate_amount_minor_units(int(value))
        return int(value)
    if name == "interests":
        return list(value or [])
    return value


class EntityStore:
    """Create/read/update/delete access to the four record kinds.

    Every mutating call commits on its own; no transaction spans two calls.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _check_fields(self, definition: KindDefinition, fields: dict[str, Any], allowed: frozenset[str]) -> None:
        for name in fields:
            if name in IMMUTABLE_FIELDS:
                raise ValidationError(f"Field is immutable: {name}")
            if name not in allowed:
                raise ValidationError(f"Unsupported field for {definition.kind.value}: {name}")

    def _commit(self, definition: KindDefinition) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValidationError(f"Conflicting {definition.label}: {exc.orig}") from exc
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def create(self, kind: EntityKind | str, fields: dict[str, Any]) -> Base:
        definition = get_kind(kind)
        creatable = frozenset(definition.accessors) - IMMUTABLE_FIELDS
        self._check_fields(definition, fields, creatable)
        if definition.kind == EntityKind.newsletter:
            existing = self.db.scalar(select(definition.model).where(definition.model.email == fields.get("email")))
            if existing is not None:
                raise ValidationError(f"Email is already subscribed: {fields.get('email')}")
        record = definition.model(**{name: _coerce_field(name, value) for name, value in fields.items()})
        self.db.add(record)
        self._commit(definition)
        return record

    def list(self, kind: EntityKind | str) -> list[Base]:
        model = get_kind(kind).model
        return list(self.db.scalars(select(model).order_by(model.id.asc())))

    def get(self, kind: EntityKind | str, record_id: int) -> Base:
        definition = get_kind(kind)
        record = self.db.get(definition.model, record_id)
        if record is None:
            raise NotFoundError(f"{definition.label.capitalize()} not found: {record_id}")
        return record

    def ids(self, kind: EntityKind | str) -> set[int]:
        model = get_kind(kind).model
        return set(self.db.scalars(select(model.id)))

    def update(self, kind: EntityKind | str, record_id: int, fields: dict[str, Any]) -> Base:
        definition = get_kind(kind)
        self._check_fields(definition, fields, definition.editable_fields)
        record = self.get(definition.kind, record_id)
        for name, value in fields.items():
            setattr(record, name, _coerce_field(name, value))
        self._commit(definition)
        return record

    def delete(self, kind: EntityKind | str, record_id: int) -> None:
        definition = get_kind(kind)
        record = self.get(definition.kind, record_id)
        self.db.delete(record)
        self._commit(definition)
