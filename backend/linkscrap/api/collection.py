import uuid
from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from linkscrap.api.deps import get_user_id
from linkscrap.core.config import Settings, get_settings
from linkscrap.core.errors import ConfigurationError
from linkscrap.db.session import get_db
from linkscrap.services.brightdata import BrightDataClient, get_brightdata
from linkscrap.services.modules import CollectionModule
from linkscrap.services import snapshots

PayloadBuilder = Callable[[Any], List[Dict[str, Any]]]
ExtrasBuilder = Callable[[Any, List[Dict[str, Any]]], Dict[str, Any]]


def url_payload(body) -> List[Dict[str, Any]]:
    return [{"url": u} for u in body.urls]


def items_payload(field: str) -> PayloadBuilder:
    def build(body) -> List[Dict[str, Any]]:
        return [item.model_dump(exclude_none=True) for item in getattr(body, field)]
    return build


def require_dataset_id(cfg: Settings, module: CollectionModule) -> str:
    dataset_id = cfg.dataset_id(module.key)
    if not dataset_id:
        raise ConfigurationError(f"{module.key} dataset ID is not configured")
    return dataset_id


def user_rows(db: Session, module: CollectionModule, user_id: str, **filters):
    return (
        db.query(module.model)
        .filter_by(user_id=user_id, **filters)
        .order_by(module.model.created_at.desc())
        .all()
    )


def owned_row(db: Session, module: CollectionModule, record_id: str, user_id: str):
    try:
        rid = uuid.UUID(record_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="record not found")
    row = db.get(module.model, rid)
    if not row or row.user_id != user_id:
        raise HTTPException(status_code=404, detail="record not found")
    return row


def one_by(db: Session, module: CollectionModule, user_id: str, **filters) -> dict:
    row = db.query(module.model).filter_by(user_id=user_id, **filters).first()
    if not row:
        raise HTTPException(status_code=404, detail="record not found")
    return row.to_dict()


def collection_router(
    module: CollectionModule,
    request_model: type,
    build_payload: PayloadBuilder,
    *,
    tags: Optional[List[str]] = None,
    extras: Optional[ExtrasBuilder] = None,
    blocking: bool = False,
    list_route: bool = True,
) -> APIRouter:
    """Trigger, snapshot and list routes shared by every collection module.

    ``blocking`` makes the trigger poll the snapshot to completion and
    materialize it before responding. Per-module lookups are added by the
    caller, then :func:`add_record_routes` registers ``/{record_id}``.
    """
    router = APIRouter(prefix=module.prefix, tags=tags or [module.key])

    def trigger(
        body: request_model,
        materialize: bool = Query(False, description="Queue a worker that materializes the snapshot when ready"),
        db: Session = Depends(get_db),
        client: BrightDataClient = Depends(get_brightdata),
        cfg: Settings = Depends(get_settings),
        user_id: str = Depends(get_user_id),
    ):
        if blocking and materialize:
            raise HTTPException(
                status_code=400,
                detail=f"{module.key} already materializes before responding; drop ?materialize",
            )
        dataset_id = require_dataset_id(cfg, module)
        payload = build_payload(body)
        if blocking:
            return snapshots.collect_and_wait(
                module,
                payload,
                db=db,
                client=client,
                dataset_id=dataset_id,
                user_id=user_id,
                poll_interval=cfg.snapshot_poll_interval,
                max_wait=cfg.snapshot_max_wait,
            )

        result = snapshots.start_collection(
            module,
            payload,
            db=db,
            client=client,
            dataset_id=dataset_id,
            user_id=user_id,
            extras=extras(body, payload) if extras else None,
        )
        if materialize and result.get("status") == "started":
            from linkscrap.workers.tasks import materialize_snapshot

            task = materialize_snapshot.delay(module.key, result["snapshot_id"], user_id, payload)
            result["materialize"] = "queued"
            result["task_id"] = task.id
        return result

    router.add_api_route("", trigger, methods=["POST"], summary=f"Trigger {module.key}")

    @router.get("/snapshot/{snapshot_id}/status")
    def get_snapshot_status(
        snapshot_id: str,
        client: BrightDataClient = Depends(get_brightdata),
        cfg: Settings = Depends(get_settings),
    ):
        return snapshots.snapshot_status(module, snapshot_id, client=client, dataset_id=cfg.dataset_id(module.key))

    @router.get("/snapshot/{snapshot_id}/data")
    def get_snapshot_data(
        snapshot_id: str,
        db: Session = Depends(get_db),
        client: BrightDataClient = Depends(get_brightdata),
        user_id: str = Depends(get_user_id),
    ):
        return snapshots.snapshot_data(module, snapshot_id, db=db, client=client, user_id=user_id)

    if list_route:
        @router.get("")
        def list_records(db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
            return [r.to_dict() for r in user_rows(db, module, user_id)]

    return router


def add_record_routes(router: APIRouter, module: CollectionModule) -> APIRouter:
    @router.get("/{record_id}")
    def get_record(record_id: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
        return owned_row(db, module, record_id, user_id).to_dict()

    @router.delete("/{record_id}")
    def delete_record(record_id: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
        row = owned_row(db, module, record_id, user_id)
        db.delete(row)
        db.commit()
        return {"success": True, "message": f"Record {record_id} deleted"}

    return router
