from urllib.parse import unquote

from fastapi import Depends
from sqlalchemy.orm import Session

from linkscrap.api.collection import (
    add_record_routes,
    collection_router,
    one_by,
    url_payload,
    user_rows,
)
from linkscrap.api.deps import get_user_id
from linkscrap.api.schemas import CompanyUrlsRequest
from linkscrap.db.session import get_db
from linkscrap.services.modules import COMPANY_INFO_COLLECT

# company collection waits for the snapshot and answers with the saved data
router = collection_router(
    COMPANY_INFO_COLLECT,
    CompanyUrlsRequest,
    url_payload,
    tags=["company-info-collect"],
    blocking=True,
)


@router.get("/company/{company_id}")
def get_by_company_id(company_id: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    return one_by(db, COMPANY_INFO_COLLECT, user_id, company_id=company_id)


@router.get("/url/{encoded_url:path}")
def get_by_url(encoded_url: str, db: Session = Depends(get_db), user_id: str = Depends(get_user_id)):
    url = unquote(encoded_url)
    return [r.to_dict() for r in user_rows(db, COMPANY_INFO_COLLECT, user_id, input_url=url)]


add_record_routes(router, COMPANY_INFO_COLLECT)
