from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from app.api.deps import get_store
from app.enums import EntityKind
from app.schemas import (
    DeleteResponse,
    DonationUpdate,
    NewsletterSubscriptionUpdate,
    VolunteerUpdate,
    YardSignRequestUpdate,
)
from app.services.entities import EntityStore
from app.services.kinds import get_kind
from app.services.validation import NotFoundError, ValidationError

router = APIRouter(prefix="/api", tags=["records"])

_UPDATE_SCHEMAS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.volunteers: VolunteerUpdate,
    EntityKind.yard_sign_requests: YardSignRequestUpdate,
    EntityKind.donations: DonationUpdate,
    EntityKind.newsletter: NewsletterSubscriptionUpdate,
}


@router.get("/{kind}")
def list_records(kind: EntityKind, store: EntityStore = Depends(get_store)) -> list[dict[str, Any]]:
    definition = get_kind(kind)
    return [definition.payload(record) for record in store.list(kind)]


@router.put("/{kind}/{record_id}")
def update_record(
    kind: EntityKind,
    record_id: int,
    body: dict[str, Any] = Body(...),
    store: EntityStore = Depends(get_store),
) -> dict[str, Any]:
    definition = get_kind(kind)
    try:
        update = _UPDATE_SCHEMAS[kind].model_validate(body)
    except SchemaValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    fields = update.model_dump(exclude_unset=True)
    try:
        if not fields:
            raise ValidationError("At least one field is required for update")
        record = store.update(kind, record_id, fields)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return definition.payload(record)


@router.delete("/{kind}/{record_id}", response_model=DeleteResponse)
def delete_record(kind: EntityKind, record_id: int, store: EntityStore = Depends(get_store)) -> DeleteResponse:
    try:
        store.delete(kind, record_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return DeleteResponse(success=True)
