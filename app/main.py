import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from sqlalchemy import text

from app.api.routes import admin, exports, health, notifications, payments, records, signups
from app.config import get_settings
from app.database import SessionLocal, engine
from app.services.schema import ensure_runtime_schema


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    ensure_runtime_schema(engine)
    with SessionLocal() as db:
        db.execute(text("SELECT 1"))
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Campaign Site",
        version="0.1.0",
        description="Lead capture forms and the admin record console for the campaign website.",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(signups.router)
    app.include_router(payments.router)
    app.include_router(notifications.router)
    app.include_router(admin.router)
    app.include_router(exports.router)
    app.include_router(records.router)

    @app.get("/meta")
    def meta() -> dict:
        settings = get_settings()
        return {
            "service": "campaign-site",
            "version": "0.1.0",
            "payments_enabled": settings.payments_enabled,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    return app


app = create_app()
