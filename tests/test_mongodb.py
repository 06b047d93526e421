"""Tests for the shared Mongo connection holder."""

from finance_tracker.core.config import Settings
from finance_tracker.db import mongodb


def test_get_database_uses_shared_client(monkeypatch) -> None:
    client = {"tracker_test": "tracker-db"}
    monkeypatch.setattr(mongodb.mongodb, "client", client)

    assert mongodb.get_client() is client
    assert mongodb.get_database(Settings(_env_file=None, MONGO_DB_NAME="tracker_test")) == "tracker-db"
