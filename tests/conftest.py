"""Pytest configuration and fixtures."""

import os

# Set test environment variables BEFORE importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.api.connector_routes import get_shorten_client
from app.connectors.shorten.client import ShortenClient
from app.connectors.shorten.properties import PropertyStore
from app.database import get_session
from app.main import app
from app.models import property_models  # noqa: F401

VALID_KEY = "valid-key-1234"

engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


class FakeShortenAPI:
    """Stands in for api.shorten.rest behind an httpx.MockTransport."""

    def __init__(self, valid_keys=(VALID_KEY,), clicks=None):
        self.valid_keys = set(valid_keys)
        self.clicks = clicks if clicks is not None else []
        self.fail_transport = False
        self.status_override = None
        self.body_override = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_transport:
            raise httpx.ConnectError("connection refused", request=request)
        if self.status_override is not None:
            return httpx.Response(self.status_override, json={"message": "error"})
        if request.headers.get("x-api-key") not in self.valid_keys:
            return httpx.Response(401, json={"message": "Unauthorized"})
        if self.body_override is not None:
            return httpx.Response(200, content=self.body_override)
        return httpx.Response(200, json={"clicks": self.clicks})

    def client(self) -> ShortenClient:
        return ShortenClient(
            base_url="https://api.shorten.rest",
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def fake_api():
    return FakeShortenAPI()


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    SQLModel.metadata.create_all(engine)
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
        SQLModel.metadata.drop_all(engine)


@pytest.fixture
def store(db_session):
    return PropertyStore(db_session)


@pytest.fixture(scope="function")
def client(db_session, fake_api):
    """Create a test client with database and upstream overrides."""

    async def override_client():
        shorten = fake_api.client()
        try:
            yield shorten
        finally:
            await shorten.close()

    app.dependency_overrides[get_session] = lambda: db_session
    app.dependency_overrides[get_shorten_client] = override_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_clicks():
    """Two click records one hour apart."""
    return [
        {
            "alias": "promo",
            "aliasId": "a1",
            "browser": "Chrome",
            "country": "US",
            "createdAt": 1700000000000,
            "destination": "https://example.com/landing",
            "domain": "short.fyi",
            "os": "Windows",
        },
        {
            "alias": "promo",
            "aliasId": "a1",
            "browser": "Safari",
            "country": "IL",
            "createdAt": 1700003600000,
            "destination": "https://example.com/landing",
            "domain": "short.fyi",
            "os": "iOS",
        },
    ]
