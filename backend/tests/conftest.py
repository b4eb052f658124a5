import os

# the app module builds its engine at import time
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from linkscrap.core.config import DATASET_ENV_VARS, Settings, get_settings
from linkscrap.db.base import Base
from linkscrap.db.session import get_db
from linkscrap.main import app
from linkscrap.services.brightdata import get_brightdata


class FakeBrightData:
    """Stands in for BrightDataClient; records calls and replays canned answers.

    ``progress`` is consumed one entry per poll and the last entry repeats.
    Exceptions placed in ``trigger_response`` or ``progress`` are raised.
    """

    def __init__(self):
        self.trigger_response = {"snapshot_id": "s_1"}
        self.progress = [{"status": "ready"}]
        self.snapshot = []
        self.triggers = []
        self.progress_calls = 0
        self.downloads = []

    def trigger(self, dataset_id, payload, type=None, discover_by=None):
        self.triggers.append(
            {"dataset_id": dataset_id, "payload": payload, "type": type, "discover_by": discover_by}
        )
        if isinstance(self.trigger_response, Exception):
            raise self.trigger_response
        return self.trigger_response

    def monitor_progress(self, snapshot_id):
        item = self.progress[min(self.progress_calls, len(self.progress) - 1)]
        self.progress_calls += 1
        if isinstance(item, Exception):
            raise item
        return item

    def download_snapshot(self, snapshot_id, format="json"):
        self.downloads.append(snapshot_id)
        return self.snapshot


def make_settings(**overrides) -> Settings:
    values = dict(
        brightdata_api_key="test-key",
        dataset_ids={key: f"gd_{key}" for key in DATASET_ENV_VARS},
        snapshot_poll_interval=0,
        snapshot_max_wait=5,
        default_user_id="local",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_brightdata():
    return FakeBrightData()


@pytest.fixture
def test_settings():
    return make_settings()


@pytest.fixture
def client(session_factory, fake_brightdata, test_settings):
    def override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_brightdata] = lambda: fake_brightdata
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
