import re
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

_URL = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)

PROFILE_URL = r"linkedin\.com/in/"
COMPANY_URL = r"linkedin\.com/company"
JOB_URL = r"linkedin\.com/jobs/view"
JOBS_URL = r"linkedin\.com/jobs"
POST_URL = r"linkedin\.com/(posts|pulse)"


def check_url(value: str, pattern: Optional[str] = None, message: str = "Must be a valid URL") -> str:
    value = (value or "").strip()
    if not _URL.match(value):
        raise ValueError("Must be a valid URL")
    if len(value) > 500:
        raise ValueError("URL must be less than 500 characters")
    if pattern and not re.search(pattern, value, re.IGNORECASE):
        raise ValueError(message)
    return value


class ProfileUrlsRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1, max_length=100)

    @field_validator("urls")
    @classmethod
    def _linkedin_profiles(cls, v):
        return [check_url(u, PROFILE_URL, "Must be a LinkedIn profile URL") for u in v]


class NameSearch(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)


class PeopleNameSearchRequest(BaseModel):
    names: List[NameSearch] = Field(..., min_length=1, max_length=50)


class CompanyUrlsRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1, max_length=50)

    @field_validator("urls")
    @classmethod
    def _linkedin_companies(cls, v):
        return [check_url(u, COMPANY_URL, "Must be a LinkedIn company URL") for u in v]


class JobUrlsRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1, max_length=100)

    @field_validator("urls")
    @classmethod
    def _linkedin_jobs(cls, v):
        return [check_url(u, JOB_URL, "Must be a LinkedIn job URL") for u in v]


class JobSearch(BaseModel):
    location: str = Field(..., min_length=1, max_length=100)
    keyword: str = Field(..., min_length=1, max_length=200)
    country: Optional[str] = Field(None, max_length=10)
    time_range: Optional[Literal["Past 24 hours", "Past week", "Past month", "Any time"]] = None
    job_type: Optional[Literal["Full-time", "Part-time", "Contract", "Temporary", "Volunteer", "Internship", "Other"]] = None
    experience_level: Optional[Literal["Internship", "Entry level", "Associate", "Mid-Senior level", "Director", "Executive"]] = None
    remote: Optional[Literal["On-site", "Remote", "Hybrid"]] = None
    company: Optional[str] = Field(None, max_length=100)
    location_radius: Optional[str] = Field(None, max_length=50)


class JobSearchRequest(BaseModel):
    searches: List[JobSearch] = Field(..., min_length=1, max_length=50)


class JobDiscoveryUrlsRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1, max_length=50)

    @field_validator("urls")
    @classmethod
    def _linkedin_job_pages(cls, v):
        return [check_url(u, JOBS_URL, "Must be a LinkedIn jobs URL") for u in v]


class PostUrlsRequest(BaseModel):
    urls: List[str] = Field(..., min_length=1, max_length=50)

    @field_validator("urls")
    @classmethod
    def _linkedin_posts(cls, v):
        return [check_url(u, POST_URL, "Must be a LinkedIn post or pulse URL") for u in v]


def _parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    # dates without an offset are read as UTC
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


class ProfilePostsItem(BaseModel):
    url: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @field_validator("url")
    @classmethod
    def _profile(cls, v):
        return check_url(v, PROFILE_URL, "Must be a LinkedIn profile URL")

    @field_validator("start_date", "end_date")
    @classmethod
    def _iso(cls, v):
        if v is None:
            return v
        try:
            _parse_iso(v)
        except ValueError:
            raise ValueError("Must be a valid ISO datetime string")
        return v

    @model_validator(mode="after")
    def _ordered(self):
        if self.start_date and self.end_date:
            start, end = _parse_iso(self.start_date), _parse_iso(self.end_date)
            if start > end:
                raise ValueError("Start date must be before or equal to end date")
        return self


class ProfilePostsRequest(BaseModel):
    profiles: List[ProfilePostsItem] = Field(..., min_length=1, max_length=50)


class PostDiscoverUrlItem(BaseModel):
    url: str
    limit: Optional[int] = Field(None, ge=1, le=100)

    @field_validator("url")
    @classmethod
    def _url(cls, v):
        return check_url(v)


class PostDiscoverUrlRequest(BaseModel):
    urls: List[PostDiscoverUrlItem] = Field(..., min_length=1, max_length=10)


class PeopleSearchItem(BaseModel):
    url: str
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)

    @field_validator("url")
    @classmethod
    def _url(cls, v):
        return check_url(v)


class PeopleSearchRequest(BaseModel):
    searches: List[PeopleSearchItem] = Field(..., min_length=1, max_length=10)


class PaginatedPeople(BaseModel):
    data: list
    total: int
    page: int
    limit: int
    total_pages: int
