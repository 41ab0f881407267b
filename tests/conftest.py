# tests/conftest.py
import os

# Settings are read at import time; provide what the app needs before importing it.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["ENV"] = "local"
os.environ["DATABASE_URL_LOCAL"] = "sqlite://"
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("BLASTABLE_API_KEY", None)
os.environ.pop("WHATSAPP_PROVIDER", None)

import pytest
from starlette.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.api import deps
from app.core.limiter import limiter
from app.db.session import get_db
from app.models import Base


# --- Test Database Setup ---
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


# --- Mock Dependencies Setup ---
class MockTokenPayload:
    def __init__(self, sub="user_123", org_id="org_abc"):
        self.sub = sub
        self.org_id = org_id


def override_get_current_user():
    return MockTokenPayload()


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def client(db):
    """
    Provides a TestClient backed by the per-test SQLite database, with
    authentication mocked and rate limiting off.
    """

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_current_user] = override_get_current_user
    limiter.enabled = False

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture(scope="function")
def client_with_auth(db):
    """TestClient that keeps the real JWT dependency."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    limiter.enabled = True
