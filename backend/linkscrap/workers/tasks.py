import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from linkscrap.core.config import settings
from linkscrap.core.errors import BrightDataError
from linkscrap.db.session import SessionLocal
from linkscrap.services.brightdata import BrightDataClient
from linkscrap.services.modules import get_module
from linkscrap.services.snapshots import download_records, materialize, wait_for_snapshot
from linkscrap.workers.celery_app import celery

logger = logging.getLogger(__name__)


def _client() -> BrightDataClient:
    return BrightDataClient.from_settings(settings)


@celery.task(name="linkscrap.workers.tasks.materialize_snapshot", bind=True, max_retries=3)
def materialize_snapshot(
    self,
    module_key: str,
    snapshot_id: str,
    user_id: str,
    criteria: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Wait for a snapshot in the background and upsert its records."""
    module = get_module(module_key)
    client = _client()
    db: Session = SessionLocal()
    try:
        wait_for_snapshot(
            client,
            snapshot_id,
            poll_interval=settings.snapshot_poll_interval,
            max_wait=settings.snapshot_max_wait,
        )
        records = download_records(client, snapshot_id)
        saved = materialize(db, module, records, user_id, criteria=criteria)
        return {
            "snapshot_id": snapshot_id,
            "module": module_key,
            "records": len(records),
            "saved_count": len(saved),
        }
    except BrightDataError as e:
        logger.error("Materializing %s snapshot %s failed: %s", module_key, snapshot_id, e)
        if e.transient and self.request.retries < 3:
            raise self.retry(exc=e, countdown=min(60, 2 ** self.request.retries))
        raise
    finally:
        db.close()
