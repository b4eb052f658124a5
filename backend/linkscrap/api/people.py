import math
from typing import Optional

from fastapi import Depends, Query
from sqlalchemy import or_, and_
from sqlalchemy.orm import Session

from linkscrap.api.collection import (
    add_record_routes,
    collection_router,
    items_payload,
    one_by,
    url_payload,
)
from linkscrap.api.deps import get_user_id
from linkscrap.api.schemas import (
    PaginatedPeople,
    PeopleNameSearchRequest,
    PeopleSearchRequest,
    ProfileUrlsRequest,
)
from linkscrap.db.session import get_db
from linkscrap.services.modules import (
    PEOPLE_PROFILE_COLLECT,
    PEOPLE_PROFILE_DISCOVER,
    PEOPLE_SEARCH_COLLECT,
)

# -------------------------------------------------------------------
# Profiles by URL
# -------------------------------------------------------------------
profile_collect_router = collection_router(
    PEOPLE_PROFILE_COLLECT,
    ProfileUrlsRequest,
    url_payload,
    tags=["people-profile-collect"],
)


@profile_collect_router.get("/linkedin-id/{linkedin_id}")
def get_profile_by_linkedin_id(linkedin_id: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return one_by(db, PEOPLE_PROFILE_COLLECT, user_id, linkedin_num_id=linkedin_id)


add_record_routes(profile_collect_router, PEOPLE_PROFILE_COLLECT)

# -------------------------------------------------------------------
# Profiles discovered by name
# -------------------------------------------------------------------
profile_discover_router = collection_router(
    PEOPLE_PROFILE_DISCOVER,
    PeopleNameSearchRequest,
    items_payload("names"),
    tags=["people-profile-discover"],
    extras=lambda body, payload: {"search_criteria": payload},
)


@profile_discover_router.get("/linkedin-id/{linkedin_id}")
def get_discovered_by_linkedin_id(linkedin_id: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return one_by(db, PEOPLE_PROFILE_DISCOVER, user_id, linkedin_num_id=linkedin_id)


@profile_discover_router.get("/search/{first_name}/{last_name}")
def search_discovered_by_name(
    first_name: str,
    last_name: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    model = PEOPLE_PROFILE_DISCOVER.model
    rows = (
        db.query(model)
        .filter(model.user_id == user_id)
        .filter(or_(
            and_(model.first_name == first_name, model.last_name == last_name),
            and_(model.search_first_name == first_name, model.search_last_name == last_name),
        ))
        .order_by(model.created_at.desc())
        .all()
    )
    return [r.to_dict() for r in rows]


add_record_routes(profile_discover_router, PEOPLE_PROFILE_DISCOVER)

# -------------------------------------------------------------------
# People search
# -------------------------------------------------------------------
people_search_router = collection_router(
    PEOPLE_SEARCH_COLLECT,
    PeopleSearchRequest,
    items_payload("searches"),
    tags=["people-search-collect"],
    extras=lambda body, payload: {"searches_count": len(payload)},
    list_route=False,
)


@people_search_router.get("", response_model=PaginatedPeople)
def list_people(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    model = PEOPLE_SEARCH_COLLECT.model
    q = db.query(model).filter(model.user_id == user_id)
    total = q.count()
    rows = q.order_by(model.created_at.desc()).offset((page - 1) * limit).limit(limit).all()
    return PaginatedPeople(
        data=[r.to_dict() for r in rows],
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


@people_search_router.get("/search")
def search_people(
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    location: Optional[str] = None,
    experience: Optional[str] = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    model = PEOPLE_SEARCH_COLLECT.model
    q = db.query(model).filter(model.user_id == user_id)
    if first_name:
        q = q.filter(model.search_first_name.ilike(f"%{first_name}%"))
    if last_name:
        q = q.filter(model.search_last_name.ilike(f"%{last_name}%"))
    if location:
        q = q.filter(model.location.ilike(f"%{location}%"))
    if experience:
        q = q.filter(model.experience.ilike(f"%{experience}%"))
    return [r.to_dict() for r in q.order_by(model.created_at.desc()).all()]


@people_search_router.get("/location/{location}")
def people_by_location(location: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    model = PEOPLE_SEARCH_COLLECT.model
    rows = (
        db.query(model)
        .filter(model.user_id == user_id, model.location == location)
        .order_by(model.created_at.desc())
        .all()
    )
    return [r.to_dict() for r in rows]


add_record_routes(people_search_router, PEOPLE_SEARCH_COLLECT)
