import math

import pytest

from linkscrap.models.company import CompanyInfo
from linkscrap.models.jobs import KeywordJobListing
from linkscrap.models.people import PeopleProfile
from linkscrap.services.modules import (
    COMPANY_INFO_COLLECT,
    JOB_LISTING_DISCOVER_KEYWORD,
    PEOPLE_PROFILE_COLLECT,
    get_module,
)
from linkscrap.services.snapshots import materialize, start_collection


def profile(num_id, name="Jane Doe", **extra):
    raw = {
        "linkedin_num_id": num_id,
        "id": f"jane-{num_id}",
        "name": name,
        "url": f"https://www.linkedin.com/in/jane-{num_id}",
        "followers": "1,200",
        "connections": 500,
    }
    raw.update(extra)
    return raw


def test_rematerializing_updates_instead_of_duplicating(db):
    materialize(db, PEOPLE_PROFILE_COLLECT, [profile("101")], "u1")
    saved = materialize(db, PEOPLE_PROFILE_COLLECT, [profile("101", name="Jane Q. Doe")], "u1")

    rows = db.query(PeopleProfile).all()
    assert len(saved) == 1
    assert len(rows) == 1
    assert rows[0].name == "Jane Q. Doe"
    assert rows[0].followers == 1200


def test_bad_records_are_skipped(db):
    records = [
        profile("101"),
        {"name": "no identifier"},
        "not an object",
        {"error": "Page does not exist", "url": "https://www.linkedin.com/in/gone"},
        profile("102"),
    ]
    saved = materialize(db, PEOPLE_PROFILE_COLLECT, records, "u1")

    assert [row.linkedin_num_id for row in saved] == ["101", "102"]
    assert db.query(PeopleProfile).count() == 2


def test_rows_are_scoped_per_user(db):
    materialize(db, PEOPLE_PROFILE_COLLECT, [profile("101")], "u1")
    materialize(db, PEOPLE_PROFILE_COLLECT, [profile("101")], "u2")

    assert db.query(PeopleProfile).count() == 2
    assert {r.user_id for r in db.query(PeopleProfile).all()} == {"u1", "u2"}


def test_empty_records_save_nothing(db):
    assert materialize(db, COMPANY_INFO_COLLECT, [], "u1") == []
    assert db.query(CompanyInfo).count() == 0


def test_inline_trigger_response_is_saved(db, fake_brightdata):
    fake_brightdata.trigger_response = {"data": [{"company_id": "7", "name": "Acme"}]}
    result = start_collection(
        COMPANY_INFO_COLLECT,
        [{"url": "https://www.linkedin.com/company/acme"}],
        db=db,
        client=fake_brightdata,
        dataset_id="gd_company",
        user_id="u1",
    )
    assert result["success"] is True
    assert result["saved_count"] == 1
    assert result["message"] == "Successfully collected 1 companies"
    assert db.query(CompanyInfo).one().name == "Acme"


def test_unknown_module_key():
    with pytest.raises(ValueError):
        get_module("people_profile_scrape")


def test_reprocessing_without_request_items_keeps_search_columns(db):
    raw = {"job_posting_id": "1", "job_title": "Python Dev"}
    materialize(db, JOB_LISTING_DISCOVER_KEYWORD, [raw], "u1", criteria=[{"keyword": "python", "location": "Paris"}])
    materialize(db, JOB_LISTING_DISCOVER_KEYWORD, [dict(raw, job_title="Senior Python Dev")], "u1")

    row = db.query(KeywordJobListing).one()
    assert row.job_title == "Senior Python Dev"
    assert row.search_keyword == "python"
    assert row.search_location == "Paris"


def test_failed_commit_rolls_back_only_that_record(db):
    records = [profile("101"), profile("102", recommendations_count=2 ** 70), profile("103")]
    saved = materialize(db, PEOPLE_PROFILE_COLLECT, records, "u1")

    assert [row.linkedin_num_id for row in saved] == ["101", "103"]
    assert {r.linkedin_num_id for r in db.query(PeopleProfile).all()} == {"101", "103"}


def test_non_finite_counts_fall_back_to_zero(db):
    saved = materialize(db, PEOPLE_PROFILE_COLLECT, [profile("101", followers=math.nan, connections=math.inf)], "u1")

    assert len(saved) == 1
    assert saved[0].followers == 0
    assert saved[0].connections == 0
