"""Map raw BrightData records onto table columns.

Every mapper takes the provider record plus the request items that produced
it (empty when materializing from a snapshot id alone) and returns a dict of
column values. Provider field names drift between datasets, so most logical
fields try several names in order.
"""
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def first(raw: Dict[str, Any], *keys: str, default=None):
    for k in keys:
        v = raw.get(k)
        if v is not None and v != "":
            return v
    return default


def to_int(value, default: Optional[int] = 0) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    m = re.search(r"-?\d[\d,]*", str(value))
    if not m:
        return default
    try:
        return int(m.group(0).replace(",", ""))
    except ValueError:
        return default


def to_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


def as_list(value) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def to_str(value) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _text(value) -> Optional[str]:
    # some datasets send short structured values where a column expects text
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def require_key(mapped: Dict[str, Any], key: str, raw: Dict[str, Any]) -> Dict[str, Any]:
    if not mapped.get(key):
        raise ValueError(f"record has no {key} (keys: {', '.join(sorted(raw)[:20])})")
    return mapped


def _input(raw: Dict[str, Any]) -> Dict[str, Any]:
    value = raw.get("input") or raw.get("discovery_input")
    return value if isinstance(value, dict) else {}


def _lower(value) -> str:
    return (value or "").strip().lower()


def match_by_url(raw: Dict[str, Any], criteria: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    candidates = {_lower(first(raw, "input_url")), _lower(_input(raw).get("url")), _lower(first(raw, "url"))}
    candidates.discard("")
    for item in criteria:
        if _lower(item.get("url")) in candidates:
            return item
    return {}


def match_by_name(raw: Dict[str, Any], criteria: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    first_name = _lower(raw.get("first_name") or _input(raw).get("first_name"))
    last_name = _lower(raw.get("last_name") or _input(raw).get("last_name"))
    for item in criteria:
        want_first = _lower(item.get("first_name"))
        want_last = _lower(item.get("last_name"))
        if want_first and want_last and want_first in first_name and want_last in last_name:
            return item
    return {}


# -------------------------------------------------------------------
# People
# -------------------------------------------------------------------
def map_profile(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    company = raw.get("current_company") if isinstance(raw.get("current_company"), dict) else {}
    mapped = {
        "linkedin_num_id": to_str(first(raw, "linkedin_num_id", "id")),
        "linkedin_id": to_str(first(raw, "linkedin_id", "id")),
        "url": first(raw, "url", "input_url"),
        "name": first(raw, "name"),
        "first_name": raw.get("first_name"),
        "last_name": raw.get("last_name"),
        "country_code": raw.get("country_code"),
        "city": first(raw, "city", "location"),
        "about": raw.get("about"),
        "followers": to_int(raw.get("followers")),
        "connections": to_int(raw.get("connections")),
        "position": first(raw, "position") or company.get("title"),
        "current_company": raw.get("current_company"),
        "current_company_name": first(raw, "current_company_name") or company.get("name"),
        "current_company_company_id": to_str(first(raw, "current_company_company_id") or company.get("company_id")),
        "experience": as_list(raw.get("experience")),
        "education": as_list(raw.get("education")),
        "educations_details": _text(raw.get("educations_details")),
        "courses": raw.get("courses"),
        "certifications": raw.get("certifications"),
        "honors_and_awards": raw.get("honors_and_awards"),
        "volunteer_experience": raw.get("volunteer_experience"),
        "organizations": raw.get("organizations"),
        "recommendations_count": to_int(raw.get("recommendations_count"), default=None),
        "recommendations": raw.get("recommendations"),
        "languages": raw.get("languages"),
        "projects": raw.get("projects"),
        "patents": raw.get("patents"),
        "publications": raw.get("publications"),
        "posts": raw.get("posts"),
        "activity": as_list(raw.get("activity")),
        "avatar": raw.get("avatar"),
        "default_avatar": to_bool(raw.get("default_avatar")),
        "banner_image": raw.get("banner_image"),
        "similar_profiles": as_list(raw.get("similar_profiles")),
        "people_also_viewed": raw.get("people_also_viewed"),
        "memorialized_account": to_bool(raw.get("memorialized_account")),
        "bio_links": as_list(raw.get("bio_links")),
        "input_url": first(raw, "input_url", "url"),
        "timestamp": to_str(first(raw, "timestamp")) or _now_iso(),
    }
    return require_key(mapped, "linkedin_num_id", raw)


def map_discovered_profile(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    mapped = map_profile(raw, criteria)
    search = match_by_name(raw, criteria) or _input(raw)
    mapped["search_first_name"] = search.get("first_name")
    mapped["search_last_name"] = search.get("last_name")
    return mapped


def map_people_search(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    search = match_by_name(raw, criteria) or match_by_url(raw, criteria) or _input(raw)
    if not search and len(criteria) == 1:
        search = criteria[0]
    mapped = {
        "url": first(raw, "url", "profile_url"),
        "name": first(raw, "name", "full_name"),
        "subtitle": first(raw, "subtitle", "headline"),
        "location": first(raw, "location", "city"),
        "experience": _text(raw.get("experience")),
        "education": _text(raw.get("education")),
        "avatar": first(raw, "avatar", "image"),
        "search_first_name": search.get("first_name"),
        "search_last_name": search.get("last_name"),
        "search_url": search.get("url"),
        "input_url": first(raw, "input_url") or search.get("url") or "",
        "timestamp": to_str(first(raw, "timestamp")) or _now_iso(),
    }
    return require_key(mapped, "url", raw)


# -------------------------------------------------------------------
# Companies
# -------------------------------------------------------------------
def map_company(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    industries = first(raw, "industries", "industry")
    if isinstance(industries, str):
        industries = [s.strip() for s in industries.split(",") if s.strip()]
    mapped = {
        "company_id": to_str(first(raw, "company_id", "id", "linkedin_id")),
        "name": first(raw, "name", "company_name"),
        "website": raw.get("website"),
        "phone": to_str(raw.get("phone")),
        "about": raw.get("about"),
        "description": first(raw, "description", "unformatted_about"),
        "url": first(raw, "url", "input_url"),
        "image_url": first(raw, "image_url", "logo", "image"),
        "background_image_url": first(raw, "background_image_url", "cover_image"),
        "followers": to_int(raw.get("followers")),
        "employees_in_linkedin": to_int(raw.get("employees_in_linkedin")),
        "company_size": to_str(first(raw, "company_size", "employees_range")),
        "organization_type": first(raw, "organization_type", "type"),
        "industries": as_list(industries),
        "specialties": _text(first(raw, "specialties", "specialities")),
        "headquarters": _text(raw.get("headquarters")),
        "founded": to_str(raw.get("founded")),
        "locations": as_list(raw.get("locations")),
        "funding": raw.get("funding"),
        "employees": as_list(raw.get("employees")),
        "updates": as_list(raw.get("updates")),
        "similar_companies": as_list(first(raw, "similar", "similar_companies")),
        "affiliated": as_list(raw.get("affiliated")),
        "input_url": first(raw, "input_url", "url"),
        "timestamp": to_str(first(raw, "timestamp")) or _now_iso(),
    }
    return require_key(mapped, "company_id", raw)


# -------------------------------------------------------------------
# Job listings
# -------------------------------------------------------------------
def map_job_listing(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    mapped = {
        "job_posting_id": to_str(first(raw, "job_posting_id", "id")),
        "url": first(raw, "url", "input_url"),
        "title_id": to_str(raw.get("title_id")),
        "company_id": to_str(raw.get("company_id")),
        "job_title": first(raw, "job_title", "title"),
        "company_name": raw.get("company_name"),
        "company_url": raw.get("company_url"),
        "company_logo": raw.get("company_logo"),
        "job_location": first(raw, "job_location", "location"),
        "country_code": raw.get("country_code"),
        "job_seniority_level": raw.get("job_seniority_level"),
        "job_employment_type": raw.get("job_employment_type"),
        "job_industries": _text(raw.get("job_industries")),
        "job_function": _text(raw.get("job_function")),
        "job_summary": first(raw, "job_summary", "description"),
        "job_num_applicants": to_int(raw.get("job_num_applicants")),
        "application_availability": to_bool(raw.get("application_availability")),
        "apply_link": raw.get("apply_link"),
        "base_salary": raw.get("base_salary"),
        "job_base_pay_range": _text(raw.get("job_base_pay_range")),
        "job_posted_date": to_str(raw.get("job_posted_date")),
        "job_posted_time": to_str(raw.get("job_posted_time")),
        "job_poster": raw.get("job_poster"),
        "job_description_formatted": raw.get("job_description_formatted"),
        "salary_standards": raw.get("salary_standards"),
        "discovery_input": raw.get("discovery_input") or raw.get("input"),
        "input_url": first(raw, "input_url", "url"),
        "timestamp": to_str(first(raw, "timestamp")) or _now_iso(),
    }
    return require_key(mapped, "job_posting_id", raw)


JOB_SEARCH_FIELDS = (
    "keyword", "location", "country", "time_range", "job_type",
    "experience_level", "remote", "company", "location_radius",
)


def _match_search(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    source = _input(raw)
    keyword = _lower(source.get("keyword"))
    location = _lower(source.get("location"))
    for item in criteria:
        if _lower(item.get("keyword")) == keyword and _lower(item.get("location")) == location:
            return item
    if source:
        return source
    # a single search can only have produced this record
    return criteria[0] if len(criteria) == 1 else {}


def map_keyword_job_listing(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    mapped = map_job_listing(raw, criteria)
    search = _match_search(raw, criteria)
    for field in JOB_SEARCH_FIELDS:
        mapped[f"search_{field}"] = to_str(search.get(field)) if search.get(field) else None
    return mapped


def discovery_url_type(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    if "/jobs/search" in url:
        return "search"
    if "/company/" in url:
        return "company"
    return "general"


def map_url_job_listing(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    mapped = map_job_listing(raw, criteria)
    source = match_by_url(raw, criteria) or _input(raw)
    discovery_url = source.get("url") or (criteria[0].get("url") if len(criteria) == 1 else None)
    mapped["discovery_url"] = discovery_url
    mapped["discovery_url_type"] = discovery_url_type(discovery_url)
    return mapped


# -------------------------------------------------------------------
# Posts
# -------------------------------------------------------------------
def map_post(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    mapped = {
        "post_id": to_str(first(raw, "post_id", "id", "linkedin_post_id")),
        "url": first(raw, "url", "input_url"),
        "author_user_id": to_str(raw.get("user_id")),
        "author_url": first(raw, "use_url", "user_url", "author_url"),
        "post_type": raw.get("post_type"),
        "date_posted": to_str(raw.get("date_posted")),
        "title": raw.get("title"),
        "headline": raw.get("headline"),
        "post_text": raw.get("post_text"),
        "post_text_html": raw.get("post_text_html"),
        "hashtags": as_list(raw.get("hashtags")),
        "embedded_links": as_list(raw.get("embedded_links")),
        "images": as_list(raw.get("images")),
        "videos": raw.get("videos"),
        "video_duration": to_str(raw.get("video_duration")),
        "repost": raw.get("repost"),
        "num_likes": to_int(raw.get("num_likes")),
        "num_comments": to_int(raw.get("num_comments")),
        "top_visible_comments": raw.get("top_visible_comments"),
        "user_title": raw.get("user_title"),
        "author_profile_pic": raw.get("author_profile_pic"),
        "num_connections": to_int(raw.get("num_connections"), default=None),
        "user_followers": to_int(raw.get("user_followers"), default=None),
        "account_type": raw.get("account_type"),
        "tagged_companies": as_list(raw.get("tagged_companies")),
        "tagged_people": as_list(raw.get("tagged_people")),
        "external_link_data": raw.get("external_link_data"),
        "document_cover_image": raw.get("document_cover_image"),
        "document_page_count": to_int(raw.get("document_page_count"), default=None),
        "input_url": first(raw, "input_url", "url"),
        "timestamp": to_str(first(raw, "timestamp")) or _now_iso(),
    }
    return require_key(mapped, "post_id", raw)


def map_company_post(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    mapped = map_post(raw, criteria)
    source = match_by_url(raw, criteria) or _input(raw)
    mapped["company_url"] = source.get("url") or (criteria[0].get("url") if len(criteria) == 1 else None)
    mapped["company_name"] = first(raw, "company_name")
    return mapped


def map_profile_post(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    mapped = map_post(raw, criteria)
    source = match_by_url(raw, criteria) or _input(raw)
    if not source and len(criteria) == 1:
        source = criteria[0]
    mapped["profile_url"] = source.get("url") or mapped.get("author_url")
    mapped["discovery_start_date"] = to_str(source.get("start_date"))
    mapped["discovery_end_date"] = to_str(source.get("end_date"))
    return mapped


def map_url_post(raw: Dict[str, Any], criteria: List[Dict[str, Any]]) -> Dict[str, Any]:
    mapped = map_post(raw, criteria)
    source = match_by_url(raw, criteria) or _input(raw)
    mapped["discovery_url"] = source.get("url") or (criteria[0].get("url") if len(criteria) == 1 else None)
    return mapped
