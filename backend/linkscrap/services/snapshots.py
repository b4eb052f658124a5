"""Trigger, poll and materialize BrightData snapshots for any collection module."""
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from linkscrap.core.errors import BrightDataError, SnapshotFailedError, SnapshotTimeoutError
from linkscrap.services.brightdata import BrightDataClient
from linkscrap.services.modules import CollectionModule

logger = logging.getLogger(__name__)

READY_STATUSES = frozenset({"ready", "completed"})
FAILED_STATUSES = frozenset({"failed", "error"})
RECORD_KEYS = ("data", "results")


def is_ready(status: Optional[str]) -> bool:
    return (status or "").lower() in READY_STATUSES


def is_failed(status: Optional[str]) -> bool:
    return (status or "").lower() in FAILED_STATUSES


def extract_records(payload: Any) -> List[Any]:
    """Return the record list from a provider payload.

    Tries the payload itself, then ``payload["data"]``, then
    ``payload["results"]``; anything else yields an empty list.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in RECORD_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
        logger.warning("No record array in provider payload; keys: %s", ", ".join(map(str, payload)))
        return []
    if payload is not None:
        logger.warning("Unexpected provider payload type: %s", type(payload).__name__)
    return []


def _has_records(payload: Any) -> bool:
    if isinstance(payload, list):
        return True
    return isinstance(payload, dict) and any(isinstance(payload.get(k), list) for k in RECORD_KEYS)


def upsert_record(db: Session, module: CollectionModule, values: Dict[str, Any], user_id: str):
    model = module.model
    key_value = values[module.natural_key]
    row = (
        db.query(model)
        .filter_by(user_id=user_id, **{module.natural_key: key_value})
        .first()
    )
    if row is not None:
        for k, v in values.items():
            # a pass without request items must not erase what an earlier pass recorded
            if v is None and k in module.criteria_fields:
                continue
            setattr(row, k, v)
    else:
        row = model(user_id=user_id, **values)
        db.add(row)
    db.commit()
    db.refresh(row)
    return row


def materialize(
    db: Session,
    module: CollectionModule,
    records: List[Any],
    user_id: str,
    criteria: Optional[List[Dict[str, Any]]] = None,
) -> list:
    """Map and upsert every record; return the rows actually written.

    Each record commits on its own. A record that fails to map or save is
    rolled back, logged and skipped.
    """
    criteria = criteria or []
    saved = []
    if not records:
        logger.warning("No %s to save for %s", module.noun, module.key)
        return saved

    for index, raw in enumerate(records):
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object %s record at index %d", module.key, index)
            continue
        if raw.get("error") and not raw.get(module.natural_key):
            # include_errors=true puts per-input failures in the dataset
            logger.warning("Skipping %s error record: %s", module.key, raw.get("error"))
            continue
        try:
            values = module.mapper(raw, criteria)
            row = upsert_record(db, module, values, user_id)
            saved.append(row)
        except Exception as e:
            db.rollback()
            logger.error(
                "Error saving %s record %s: %s",
                module.key,
                raw.get(module.natural_key) or raw.get("id") or raw.get("url") or index,
                e,
            )

    logger.info("Saved %d of %d %s for user %s", len(saved), len(records), module.noun, user_id)
    return saved


def start_collection(
    module: CollectionModule,
    payload: List[Dict[str, Any]],
    *,
    db: Session,
    client: BrightDataClient,
    dataset_id: str,
    user_id: str,
    extras: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    extras = extras or {}
    logger.info("Starting %s for %d items", module.key, len(payload))
    response = client.trigger(
        dataset_id,
        payload,
        type=module.trigger_type,
        discover_by=module.discover_by,
    )

    if isinstance(response, dict) and response.get("snapshot_id"):
        snapshot_id = str(response["snapshot_id"])
        logger.info("Received snapshot_id %s for %s", snapshot_id, module.key)
        return {
            "success": True,
            "message": "Data collection started successfully. Use the snapshot_id to check status and retrieve data when ready.",
            "snapshot_id": snapshot_id,
            "status": "started",
            **extras,
            "instructions": {
                "check_status": module.status_path(snapshot_id),
                "get_data": module.data_path(snapshot_id),
            },
        }

    if _has_records(response):
        records = extract_records(response)
        saved = materialize(db, module, records, user_id, criteria=payload)
        return {
            "success": True,
            "message": f"Successfully collected {len(saved)} {module.noun}",
            "data": records,
            "saved_count": len(saved),
            **extras,
        }

    logger.warning("Unexpected response format from BrightData for %s: %r", module.key, response)
    return {
        "success": False,
        "message": "Unexpected response format from BrightData",
        "response": response,
    }


def snapshot_status(
    module: CollectionModule,
    snapshot_id: str,
    *,
    client: BrightDataClient,
    dataset_id: Optional[str] = None,
) -> Dict[str, Any]:
    progress = client.monitor_progress(snapshot_id)
    status = progress.get("status")
    return {
        "success": True,
        "snapshot_id": snapshot_id,
        "status": status,
        "dataset_id": progress.get("dataset_id") or dataset_id,
        "message": f"Snapshot status: {status}",
    }


def download_records(client: BrightDataClient, snapshot_id: str) -> List[Any]:
    return extract_records(client.download_snapshot(snapshot_id))


def snapshot_data(
    module: CollectionModule,
    snapshot_id: str,
    *,
    db: Session,
    client: BrightDataClient,
    user_id: str,
) -> Dict[str, Any]:
    progress = client.monitor_progress(snapshot_id)
    status = progress.get("status")
    if not is_ready(status):
        if is_failed(status):
            message = f"Snapshot failed with status: {status}"
        else:
            message = f"Snapshot is not ready yet. Current status: {status}"
        return {
            "success": False,
            "snapshot_id": snapshot_id,
            "status": status,
            "message": message,
        }

    records = download_records(client, snapshot_id)
    saved = materialize(db, module, records, user_id)
    logger.info("Processed %d %s from snapshot %s", len(saved), module.noun, snapshot_id)
    return {
        "success": True,
        "snapshot_id": snapshot_id,
        "status": status,
        "message": f"Successfully retrieved {len(records)} {module.noun}",
        "data": records,
        "saved_count": len(saved),
    }


def wait_for_snapshot(
    client: BrightDataClient,
    snapshot_id: str,
    *,
    poll_interval: float = 5.0,
    max_wait: float = 300.0,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Dict[str, Any]:
    """Poll until the snapshot is ready and return the last progress payload.

    Raises SnapshotFailedError on a failure status and SnapshotTimeoutError
    once ``max_wait`` seconds have elapsed. Transient provider errors are
    logged and polling continues.
    """
    started = clock()
    logger.info("Polling snapshot %s (interval=%ss, max_wait=%ss)", snapshot_id, poll_interval, max_wait)
    while clock() - started < max_wait:
        try:
            progress = client.monitor_progress(snapshot_id)
        except BrightDataError as e:
            if not e.transient:
                raise
            logger.warning("Transient error while polling %s, retrying: %s", snapshot_id, e)
            sleep(poll_interval)
            continue

        status = progress.get("status")
        if is_ready(status):
            logger.info("Snapshot %s is %s", snapshot_id, status)
            return progress
        if is_failed(status):
            logger.error("Snapshot %s ended with status %s", snapshot_id, status)
            raise SnapshotFailedError(snapshot_id, status)

        logger.debug("Snapshot %s still %s, waiting %ss", snapshot_id, status, poll_interval)
        sleep(poll_interval)

    logger.warning("Timed out waiting for snapshot %s", snapshot_id)
    raise SnapshotTimeoutError(snapshot_id, max_wait)


def collect_and_wait(
    module: CollectionModule,
    payload: List[Dict[str, Any]],
    *,
    db: Session,
    client: BrightDataClient,
    dataset_id: str,
    user_id: str,
    poll_interval: float,
    max_wait: float,
    sleep: Callable[[float], None] = time.sleep,
) -> Dict[str, Any]:
    """Trigger a collection and block until its records are materialized."""
    started = start_collection(module, payload, db=db, client=client, dataset_id=dataset_id, user_id=user_id)
    if not started.get("success") or "snapshot_id" not in started:
        return started

    snapshot_id = started["snapshot_id"]
    wait_for_snapshot(client, snapshot_id, poll_interval=poll_interval, max_wait=max_wait, sleep=sleep)
    records = download_records(client, snapshot_id)
    saved = materialize(db, module, records, user_id, criteria=payload)
    return {
        "success": True,
        "message": f"Successfully collected {len(saved)} {module.noun}",
        "data": records,
        "saved_count": len(saved),
        "snapshot_id": snapshot_id,
    }
