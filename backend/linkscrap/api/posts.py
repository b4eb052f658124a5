from fastapi import Depends, Query
from sqlalchemy.orm import Session

from linkscrap.api.collection import (
    add_record_routes,
    collection_router,
    items_payload,
    one_by,
    url_payload,
    user_rows,
)
from linkscrap.api.deps import get_user_id
from linkscrap.api.schemas import (
    CompanyUrlsRequest,
    PostDiscoverUrlRequest,
    PostUrlsRequest,
    ProfilePostsRequest,
)
from linkscrap.db.session import get_db
from linkscrap.services.modules import (
    POST_COLLECT,
    POST_DISCOVER_COMPANY,
    POST_DISCOVER_PROFILE,
    POST_DISCOVER_URL,
)


def _by_post_id(router, module):
    @router.get("/post/{post_id}")
    def get_by_post_id(post_id: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
        return one_by(db, module, user_id, post_id=post_id)


collect_router = collection_router(POST_COLLECT, PostUrlsRequest, url_payload, tags=["post-collect"])
_by_post_id(collect_router, POST_COLLECT)
add_record_routes(collect_router, POST_COLLECT)


company_router = collection_router(
    POST_DISCOVER_COMPANY,
    CompanyUrlsRequest,
    url_payload,
    tags=["post-discover-company"],
)


@company_router.get("/company")
def posts_for_company(url: str = Query(...), db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return [r.to_dict() for r in user_rows(db, POST_DISCOVER_COMPANY, user_id, company_url=url)]


_by_post_id(company_router, POST_DISCOVER_COMPANY)
add_record_routes(company_router, POST_DISCOVER_COMPANY)


profile_router = collection_router(
    POST_DISCOVER_PROFILE,
    ProfilePostsRequest,
    items_payload("profiles"),
    tags=["post-discover-profile"],
)


@profile_router.get("/profile")
def posts_for_profile(url: str = Query(...), db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return [r.to_dict() for r in user_rows(db, POST_DISCOVER_PROFILE, user_id, profile_url=url)]


_by_post_id(profile_router, POST_DISCOVER_PROFILE)
add_record_routes(profile_router, POST_DISCOVER_PROFILE)


url_router = collection_router(
    POST_DISCOVER_URL,
    PostDiscoverUrlRequest,
    items_payload("urls"),
    tags=["post-discover-url"],
)
_by_post_id(url_router, POST_DISCOVER_URL)
add_record_routes(url_router, POST_DISCOVER_URL)
