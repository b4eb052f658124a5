import pytest

from linkscrap.core.config import get_settings
from linkscrap.main import app

from conftest import make_settings

PROFILE = "https://www.linkedin.com/in/jane-doe"
COMPANY = "https://www.linkedin.com/company/acme"


@pytest.mark.parametrize(
    "prefix, module_key, body, payload, discover_by",
    [
        (
            "/linkedin/people-profile/discover",
            "people_profile_discover",
            {"names": [{"first_name": "Jane", "last_name": "Doe"}]},
            [{"first_name": "Jane", "last_name": "Doe"}],
            "name",
        ),
        (
            "/linkedin/job-listing/collect",
            "job_listing_collect",
            {"urls": ["https://www.linkedin.com/jobs/view/4012345678"]},
            [{"url": "https://www.linkedin.com/jobs/view/4012345678"}],
            None,
        ),
        (
            "/linkedin/job-listing/discover-keyword",
            "job_listing_discover_keyword",
            {"searches": [{"location": "Paris", "keyword": "python", "remote": "Remote"}]},
            [{"location": "Paris", "keyword": "python", "remote": "Remote"}],
            "keyword",
        ),
        (
            "/linkedin/job-listing/discover-url",
            "job_listing_discover_url",
            {"urls": ["https://www.linkedin.com/jobs/search?keywords=python"]},
            [{"url": "https://www.linkedin.com/jobs/search?keywords=python"}],
            "url",
        ),
        (
            "/linkedin/post/collect",
            "post_collect",
            {"urls": ["https://www.linkedin.com/posts/jane-doe_activity-7001"]},
            [{"url": "https://www.linkedin.com/posts/jane-doe_activity-7001"}],
            None,
        ),
        (
            "/linkedin/post/discover-company",
            "post_discover_company",
            {"urls": [COMPANY]},
            [{"url": COMPANY}],
            "company_url",
        ),
        (
            "/linkedin/post/discover-profile",
            "post_discover_profile",
            {"profiles": [{"url": PROFILE, "start_date": "2024-01-01T00:00:00.000Z"}]},
            [{"url": PROFILE, "start_date": "2024-01-01T00:00:00.000Z"}],
            "profile_url",
        ),
        (
            "/linkedin/post/discover-url",
            "post_discover_url",
            {"urls": [{"url": "https://www.linkedin.com/pulse/topics/ai", "limit": 20}]},
            [{"url": "https://www.linkedin.com/pulse/topics/ai", "limit": 20}],
            "url",
        ),
        (
            "/linkedin/people-search-collect",
            "people_search_collect",
            {"searches": [{"url": "https://www.linkedin.com", "first_name": "Jane", "last_name": "Doe"}]},
            [{"url": "https://www.linkedin.com", "first_name": "Jane", "last_name": "Doe"}],
            None,
        ),
    ],
)
def test_trigger_parameters_per_module(client, fake_brightdata, prefix, module_key, body, payload, discover_by):
    res = client.post(prefix, json=body)

    assert res.status_code == 200
    assert res.json()["snapshot_id"] == "s_1"
    assert res.json()["instructions"]["get_data"] == f"GET {prefix}/snapshot/s_1/data"
    assert fake_brightdata.triggers == [{
        "dataset_id": f"gd_{module_key}",
        "payload": payload,
        "type": "discover_new" if discover_by else None,
        "discover_by": discover_by,
    }]


def test_discovery_responses_echo_search_criteria(client):
    body = client.post(
        "/linkedin/job-listing/discover-keyword",
        json={"searches": [{"location": "Paris", "keyword": "python"}]},
    ).json()
    assert body["search_criteria"] == [{"location": "Paris", "keyword": "python"}]

    body = client.post(
        "/linkedin/people-search-collect",
        json={"searches": [{"url": "https://www.linkedin.com", "first_name": "Jane", "last_name": "Doe"}]},
    ).json()
    assert body["searches_count"] == 1


# -------------------------------------------------------------------
# Company info waits for the snapshot
# -------------------------------------------------------------------
def test_company_collect_blocks_until_saved(client, fake_brightdata):
    fake_brightdata.trigger_response = {"snapshot_id": "s_c"}
    fake_brightdata.progress = [{"status": "running"}, {"status": "running"}, {"status": "ready"}]
    fake_brightdata.snapshot = [{
        "company_id": "1035",
        "name": "Acme",
        "url": COMPANY,
        "industries": "Software, IT Services",
        "followers": "12,345",
    }]

    body = client.post("/linkedin/company-info/collect", json={"urls": [COMPANY]}).json()

    assert body["success"] is True
    assert body["snapshot_id"] == "s_c"
    assert body["saved_count"] == 1
    assert fake_brightdata.progress_calls == 3

    company = client.get("/linkedin/company-info/collect/company/1035").json()
    assert company["industries"] == ["Software", "IT Services"]
    assert company["followers"] == 12345

    by_url = client.get("/linkedin/company-info/collect/url/https%3A%2F%2Fwww.linkedin.com%2Fcompany%2Facme").json()
    assert [c["company_id"] for c in by_url] == ["1035"]


def test_company_collect_failed_snapshot(client, fake_brightdata):
    fake_brightdata.progress = [{"status": "failed"}]
    res = client.post("/linkedin/company-info/collect", json={"urls": [COMPANY]})
    assert res.status_code == 502
    assert res.json()["detail"] == "BrightData collection failed with status: failed"
    assert fake_brightdata.downloads == []


def test_company_collect_times_out(client, fake_brightdata):
    app.dependency_overrides[get_settings] = lambda: make_settings(snapshot_max_wait=0)
    fake_brightdata.progress = [{"status": "running"}]
    res = client.post("/linkedin/company-info/collect", json={"urls": [COMPANY]})
    assert res.status_code == 504
    assert res.json()["detail"] == "Timeout: Data collection did not complete within 0 seconds"


# -------------------------------------------------------------------
# Lookups
# -------------------------------------------------------------------
def test_people_search_pagination_and_filters(client, fake_brightdata):
    fake_brightdata.snapshot = [
        {
            "url": f"https://www.linkedin.com/in/jane-doe-{i}",
            "name": f"Jane Doe {i}",
            "location": "Paris" if i % 2 else "Berlin",
            "experience": "Engineer at Acme",
            "input": {"url": "https://www.linkedin.com", "first_name": "Jane", "last_name": "Doe"},
        }
        for i in range(5)
    ]
    assert client.get("/linkedin/people-search-collect/snapshot/s_1/data").json()["saved_count"] == 5

    page = client.get("/linkedin/people-search-collect", params={"page": 2, "limit": 2}).json()
    assert len(page["data"]) == 2
    assert page["total"] == 5
    assert page["page"] == 2
    assert page["total_pages"] == 3

    found = client.get("/linkedin/people-search-collect/search", params={"first_name": "jan", "location": "paris"}).json()
    assert len(found) == 2
    assert len(client.get("/linkedin/people-search-collect/location/Berlin").json()) == 3


def test_discovered_profiles_by_name(client, fake_brightdata):
    fake_brightdata.snapshot = [{"linkedin_num_id": "9", "first_name": "Jane", "last_name": "Doe", "name": "Jane Doe"}]
    client.get("/linkedin/people-profile/discover/snapshot/s_1/data")

    rows = client.get("/linkedin/people-profile/discover/search/Jane/Doe").json()
    assert [r["linkedin_num_id"] for r in rows] == ["9"]
    assert client.get("/linkedin/people-profile/discover/search/John/Roe").json() == []


def test_keyword_job_search(client, fake_brightdata):
    fake_brightdata.snapshot = [
        {"job_posting_id": "1", "job_title": "Python Dev", "input": {"keyword": "python", "location": "Paris"}},
        {"job_posting_id": "2", "job_title": "Rust Dev", "input": {"keyword": "rust", "location": "Berlin"}},
    ]
    client.get("/linkedin/job-listing/discover-keyword/snapshot/s_1/data")

    found = client.get("/linkedin/job-listing/discover-keyword/search", params={"keyword": "PYTH"}).json()
    assert [j["job_posting_id"] for j in found] == ["1"]
    job = client.get("/linkedin/job-listing/discover-keyword/job/2").json()
    assert job["search_location"] == "Berlin"


def test_company_posts_lookup(client, fake_brightdata):
    fake_brightdata.snapshot = [
        {"post_id": "7001", "url": "https://www.linkedin.com/posts/acme_1", "input": {"url": COMPANY}},
    ]
    client.get("/linkedin/post/discover-company/snapshot/s_1/data")

    posts = client.get("/linkedin/post/discover-company/company", params={"url": COMPANY}).json()
    assert [p["post_id"] for p in posts] == ["7001"]
    assert client.get("/linkedin/post/discover-company/post/7001").json()["company_url"] == COMPANY
    assert client.get("/linkedin/post/discover-company/post/404").status_code == 404


def test_company_collect_rejects_background_materialize(client, fake_brightdata):
    res = client.post("/linkedin/company-info/collect?materialize=true", json={"urls": [COMPANY]})
    assert res.status_code == 400
    assert fake_brightdata.triggers == []
