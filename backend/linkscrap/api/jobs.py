from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from linkscrap.api.collection import (
    add_record_routes,
    collection_router,
    items_payload,
    one_by,
    url_payload,
)
from linkscrap.api.deps import get_user_id
from linkscrap.api.schemas import JobDiscoveryUrlsRequest, JobSearchRequest, JobUrlsRequest
from linkscrap.db.session import get_db
from linkscrap.services.modules import (
    JOB_LISTING_COLLECT,
    JOB_LISTING_DISCOVER_KEYWORD,
    JOB_LISTING_DISCOVER_URL,
)


def _by_posting_id(router, module):
    @router.get("/job/{job_posting_id}")
    def get_by_job_posting_id(job_posting_id: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
        return one_by(db, module, user_id, job_posting_id=job_posting_id)


collect_router = collection_router(
    JOB_LISTING_COLLECT,
    JobUrlsRequest,
    url_payload,
    tags=["job-listing-collect"],
)
_by_posting_id(collect_router, JOB_LISTING_COLLECT)
add_record_routes(collect_router, JOB_LISTING_COLLECT)


keyword_router = collection_router(
    JOB_LISTING_DISCOVER_KEYWORD,
    JobSearchRequest,
    items_payload("searches"),
    tags=["job-listing-discover-keyword"],
    extras=lambda body, payload: {"search_criteria": payload},
)


@keyword_router.get("/search")
def search_keyword_listings(
    keyword: Optional[str] = None,
    location: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    model = JOB_LISTING_DISCOVER_KEYWORD.model
    q = db.query(model).filter(model.user_id == user_id)
    if keyword:
        q = q.filter(model.search_keyword.ilike(f"%{keyword}%"))
    if location:
        q = q.filter(model.search_location.ilike(f"%{location}%"))
    return [r.to_dict() for r in q.order_by(model.created_at.desc()).all()]


_by_posting_id(keyword_router, JOB_LISTING_DISCOVER_KEYWORD)
add_record_routes(keyword_router, JOB_LISTING_DISCOVER_KEYWORD)


url_router = collection_router(
    JOB_LISTING_DISCOVER_URL,
    JobDiscoveryUrlsRequest,
    url_payload,
    tags=["job-listing-discover-url"],
)
_by_posting_id(url_router, JOB_LISTING_DISCOVER_URL)
add_record_routes(url_router, JOB_LISTING_DISCOVER_URL)
