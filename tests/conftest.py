import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_campaign.db")
os.environ.setdefault("USE_MOCK_PAYMENTS", "true")
os.environ.setdefault("PAYMENTS_ENABLED", "true")
os.environ.setdefault("PAYMENT_CURRENCY", "usd")

from app.config import get_settings  # noqa: E402
from app.database import SessionLocal, engine  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models.base import Base  # noqa: E402
from app.services.entities import EntityStore  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    get_settings.cache_clear()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def db_session():
    with SessionLocal() as db:
        yield db
        db.rollback()


@pytest.fixture()
def store(db_session):
    return EntityStore(db_session)
