"""Pytest configuration and shared fixtures.

Every test runs against a fresh SQLite file in ``tmp_path``.  The
``requests_session`` fixture routes ``http://testserver`` into the
ASGI app, so the requests-based client can be exercised end to end
without a running server; every other ``http://`` host refuses the
connection.
"""

from datetime import datetime
from decimal import Decimal

import pytest
import requests
from fastapi.testclient import TestClient
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from eventures.app.core.config import settings
from eventures.app.core.db import get_cursor, init_db
from eventures.app.core.security import create_access_token, hash_password
from eventures.app.main import app
from eventures.app.schemas.event import EventBindingModel
from eventures.app.schemas.user import Principal
from eventures.app.services.event_store import EventStore

API_URL = "http://testserver/api/"


def create_user(username: str, password: str = "123456", email: str = None) -> Principal:
    with get_cursor() as cursor:
        cursor.execute(
            "INSERT INTO users (username, email, password, first_name, last_name) VALUES (?, ?, ?, ?, ?)",
            (username, email or f"{username}@mail.com", hash_password(password), username.title(), "Test"),
        )
        return Principal(id=cursor.lastrowid, username=username)


def event_draft(**overrides) -> EventBindingModel:
    values = dict(
        name="Softuniada 2021",
        place="Sofia",
        start=datetime(2026, 11, 1, 9, 0),
        end=datetime(2026, 11, 1, 18, 0),
        total_tickets=120,
        price_per_ticket=Decimal("12.00"),
    )
    values.update(overrides)
    return EventBindingModel(**values)


def auth_headers(principal: Principal) -> dict:
    token, _ = create_access_token({"sub": principal.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "eventures.db"))
    init_db()
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def maria() -> Principal:
    return create_user("maria")


@pytest.fixture
def peter() -> Principal:
    return create_user("peter")


@pytest.fixture
def seeded_events(maria, peter):
    """Two events owned by maria and one owned by peter."""
    return [
        EventStore.insert_event(event_draft(), owner_id=maria.id),
        EventStore.insert_event(
            event_draft(name="OpenFest", place="Sofia Tech Park", price_per_ticket=Decimal("0")),
            owner_id=maria.id,
        ),
        EventStore.insert_event(event_draft(name="Varna Jazz", place="Varna"), owner_id=peter.id),
    ]


class ASGIAdapter(BaseAdapter):
    """Transport adapter that sends requests through a ``TestClient``."""

    def __init__(self, test_client: TestClient):
        super().__init__()
        self.test_client = test_client

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        headers = {k: v for k, v in request.headers.items() if k.lower() != "content-length"}
        upstream = self.test_client.request(
            request.method, request.url, headers=headers, content=request.body or b""
        )
        response = requests.Response()
        response.status_code = upstream.status_code
        response.reason = upstream.reason_phrase
        response.headers = CaseInsensitiveDict(upstream.headers)
        response._content = upstream.content
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


class RefusingAdapter(BaseAdapter):
    def send(self, request, **kwargs):
        raise requests.ConnectionError(f"Connection refused: {request.url}")

    def close(self):
        pass


@pytest.fixture
def requests_session(client):
    session = requests.Session()
    session.mount("http://", RefusingAdapter())
    session.mount("https://", RefusingAdapter())
    session.mount("http://testserver", ASGIAdapter(client))
    return session
