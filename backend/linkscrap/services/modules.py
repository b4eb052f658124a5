from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from linkscrap.models.company import CompanyInfo
from linkscrap.models.jobs import JobListing, KeywordJobListing, UrlJobListing
from linkscrap.models.people import DiscoveredProfile, PeopleProfile, PeopleSearchResult
from linkscrap.models.posts import CompanyPost, Post, ProfilePost, UrlPost
from linkscrap.services import mappers

Mapper = Callable[[Dict[str, Any], List[Dict[str, Any]]], Dict[str, Any]]


@dataclass(frozen=True)
class CollectionModule:
    """Everything that differs between two collection endpoints.

    The snapshot helpers are written once against this descriptor: which
    dataset to trigger and in which discovery mode, how to map a provider
    record, which table it lands in and which column is its natural key.
    """

    key: str
    prefix: str
    noun: str
    model: Any
    mapper: Mapper
    natural_key: str
    discover_by: Optional[str] = None
    # columns filled from the request items rather than the provider record
    criteria_fields: Tuple[str, ...] = ()

    @property
    def trigger_type(self) -> Optional[str]:
        return "discover_new" if self.discover_by else None

    def status_path(self, snapshot_id: str) -> str:
        return f"GET {self.prefix}/snapshot/{snapshot_id}/status"

    def data_path(self, snapshot_id: str) -> str:
        return f"GET {self.prefix}/snapshot/{snapshot_id}/data"


PEOPLE_PROFILE_COLLECT = CollectionModule(
    key="people_profile_collect",
    prefix="/linkedin/people-profile/collect",
    noun="profiles",
    model=PeopleProfile,
    mapper=mappers.map_profile,
    natural_key="linkedin_num_id",
)

PEOPLE_PROFILE_DISCOVER = CollectionModule(
    key="people_profile_discover",
    prefix="/linkedin/people-profile/discover",
    noun="discovered profiles",
    model=DiscoveredProfile,
    mapper=mappers.map_discovered_profile,
    natural_key="linkedin_num_id",
    discover_by="name",
    criteria_fields=("search_first_name", "search_last_name"),
)

COMPANY_INFO_COLLECT = CollectionModule(
    key="company_info_collect",
    prefix="/linkedin/company-info/collect",
    noun="companies",
    model=CompanyInfo,
    mapper=mappers.map_company,
    natural_key="company_id",
)

JOB_LISTING_COLLECT = CollectionModule(
    key="job_listing_collect",
    prefix="/linkedin/job-listing/collect",
    noun="job listings",
    model=JobListing,
    mapper=mappers.map_job_listing,
    natural_key="job_posting_id",
)

JOB_LISTING_DISCOVER_KEYWORD = CollectionModule(
    key="job_listing_discover_keyword",
    prefix="/linkedin/job-listing/discover-keyword",
    noun="job listings",
    model=KeywordJobListing,
    mapper=mappers.map_keyword_job_listing,
    natural_key="job_posting_id",
    discover_by="keyword",
    criteria_fields=tuple(f"search_{f}" for f in mappers.JOB_SEARCH_FIELDS),
)

JOB_LISTING_DISCOVER_URL = CollectionModule(
    key="job_listing_discover_url",
    prefix="/linkedin/job-listing/discover-url",
    noun="job listings",
    model=UrlJobListing,
    mapper=mappers.map_url_job_listing,
    natural_key="job_posting_id",
    discover_by="url",
    criteria_fields=("discovery_url", "discovery_url_type"),
)

POST_COLLECT = CollectionModule(
    key="post_collect",
    prefix="/linkedin/post/collect",
    noun="posts",
    model=Post,
    mapper=mappers.map_post,
    natural_key="post_id",
)

POST_DISCOVER_COMPANY = CollectionModule(
    key="post_discover_company",
    prefix="/linkedin/post/discover-company",
    noun="posts",
    model=CompanyPost,
    mapper=mappers.map_company_post,
    natural_key="post_id",
    discover_by="company_url",
    criteria_fields=("company_url",),
)

POST_DISCOVER_PROFILE = CollectionModule(
    key="post_discover_profile",
    prefix="/linkedin/post/discover-profile",
    noun="posts",
    model=ProfilePost,
    mapper=mappers.map_profile_post,
    natural_key="post_id",
    discover_by="profile_url",
    criteria_fields=("profile_url", "discovery_start_date", "discovery_end_date"),
)

POST_DISCOVER_URL = CollectionModule(
    key="post_discover_url",
    prefix="/linkedin/post/discover-url",
    noun="posts",
    model=UrlPost,
    mapper=mappers.map_url_post,
    natural_key="post_id",
    discover_by="url",
    criteria_fields=("discovery_url",),
)

PEOPLE_SEARCH_COLLECT = CollectionModule(
    key="people_search_collect",
    prefix="/linkedin/people-search-collect",
    noun="people",
    model=PeopleSearchResult,
    mapper=mappers.map_people_search,
    natural_key="url",
    criteria_fields=("search_first_name", "search_last_name", "search_url"),
)

MODULES: Dict[str, CollectionModule] = {
    m.key: m
    for m in (
        PEOPLE_PROFILE_COLLECT,
        PEOPLE_PROFILE_DISCOVER,
        COMPANY_INFO_COLLECT,
        JOB_LISTING_COLLECT,
        JOB_LISTING_DISCOVER_KEYWORD,
        JOB_LISTING_DISCOVER_URL,
        POST_COLLECT,
        POST_DISCOVER_COMPANY,
        POST_DISCOVER_PROFILE,
        POST_DISCOVER_URL,
        PEOPLE_SEARCH_COLLECT,
    )
}


def get_module(key: str) -> CollectionModule:
    try:
        return MODULES[key]
    except KeyError:
        raise ValueError(f"Unknown collection module: {key}") from None
