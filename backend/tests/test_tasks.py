import pytest

from linkscrap.core.errors import BrightDataError, SnapshotFailedError
from linkscrap.models.posts import Post
from linkscrap.workers import tasks


@pytest.fixture
def worker(monkeypatch, session_factory, fake_brightdata):
    monkeypatch.setattr(tasks, "SessionLocal", session_factory)
    monkeypatch.setattr(tasks, "_client", lambda: fake_brightdata)
    return fake_brightdata


def test_materialize_snapshot_saves_records(worker, db):
    worker.progress = [{"status": "ready"}]
    worker.snapshot = [
        {"id": "7001", "url": "https://www.linkedin.com/posts/jane_1", "user_id": "jane"},
        {"id": "7002", "url": "https://www.linkedin.com/posts/jane_2", "user_id": "jane"},
    ]

    result = tasks.materialize_snapshot("post_collect", "s_1", "u1")

    assert result == {"snapshot_id": "s_1", "module": "post_collect", "records": 2, "saved_count": 2}
    assert db.query(Post).filter_by(user_id="u1").count() == 2


def test_failed_snapshot_is_not_downloaded(worker):
    worker.progress = [{"status": "failed"}]
    with pytest.raises(SnapshotFailedError):
        tasks.materialize_snapshot("post_collect", "s_1", "u1")
    assert worker.downloads == []


def test_permanent_provider_error_propagates(worker):
    worker.progress = [BrightDataError("Failed to monitor snapshot progress: HTTP 401", upstream_status=401)]
    with pytest.raises(BrightDataError):
        tasks.materialize_snapshot("post_collect", "s_1", "u1")
