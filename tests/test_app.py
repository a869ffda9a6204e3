from fastapi.testclient import TestClient

from eventures.app.core.config import settings
from eventures.app.core.db import MIGRATIONS, get_cursor
from eventures.app.main import app


def test_startup_applies_migrations_to_a_new_database(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "fresh.db"))
    with TestClient(app) as client:
        assert client.get("/api/events/count").json() == 0
    with get_cursor() as cursor:
        version = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()["version"]
        tables = {row["name"] for row in cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
    assert version == MIGRATIONS[-1][0]
    assert {"users", "events"} <= tables
