from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas import HealthDetailsResponse, HealthResponse
from app.services.kinds import all_kinds

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(UTC))


@router.get("/health/details", response_model=HealthDetailsResponse)
def health_details(db: Session = Depends(get_db)) -> HealthDetailsResponse:
    db.execute(select(1))
    record_counts = {
        definition.kind.value: int(db.scalar(select(func.count()).select_from(definition.model)) or 0)
        for definition in all_kinds()
    }
    return HealthDetailsResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        database_ok=True,
        record_counts=record_counts,
    )
