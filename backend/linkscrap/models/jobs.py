from sqlalchemy import Column, String, Text, Integer, Boolean, JSON, UniqueConstraint

from linkscrap.db.base import Base
from linkscrap.models.records import CollectedRecordMixin


class JobListingColumns(CollectedRecordMixin):
    job_posting_id = Column(String, nullable=False, index=True)
    url = Column(Text, nullable=True)
    title_id = Column(String, nullable=True)
    company_id = Column(String, nullable=True)
    job_title = Column(Text, nullable=True)
    company_name = Column(String, nullable=True)
    company_url = Column(Text, nullable=True)
    company_logo = Column(Text, nullable=True)
    job_location = Column(String, nullable=True)
    country_code = Column(String, nullable=True)
    job_seniority_level = Column(String, nullable=True)
    job_employment_type = Column(String, nullable=True)
    job_industries = Column(Text, nullable=True)
    job_function = Column(Text, nullable=True)
    job_summary = Column(Text, nullable=True)
    job_num_applicants = Column(Integer, nullable=False, default=0)
    application_availability = Column(Boolean, nullable=False, default=False)
    apply_link = Column(Text, nullable=True)
    base_salary = Column(JSON, nullable=True)
    job_base_pay_range = Column(String, nullable=True)
    job_posted_date = Column(String, nullable=True)
    job_posted_time = Column(String, nullable=True)
    job_poster = Column(JSON, nullable=True)
    job_description_formatted = Column(Text, nullable=True)
    salary_standards = Column(JSON, nullable=True)
    discovery_input = Column(JSON, nullable=True)


class JobListing(JobListingColumns, Base):
    __tablename__ = "job_listings"
    __table_args__ = (UniqueConstraint("user_id", "job_posting_id", name="uq_job_listings_user_posting"),)


class KeywordJobListing(JobListingColumns, Base):
    __tablename__ = "job_listings_discovered"
    __table_args__ = (UniqueConstraint("user_id", "job_posting_id", name="uq_job_listings_discovered_user_posting"),)

    search_keyword = Column(String, nullable=True, index=True)
    search_location = Column(String, nullable=True, index=True)
    search_country = Column(String, nullable=True)
    search_time_range = Column(String, nullable=True)
    search_job_type = Column(String, nullable=True)
    search_experience_level = Column(String, nullable=True)
    search_remote = Column(String, nullable=True)
    search_company = Column(String, nullable=True)
    search_location_radius = Column(String, nullable=True)


class UrlJobListing(JobListingColumns, Base):
    __tablename__ = "job_listings_discovered_by_url"
    __table_args__ = (UniqueConstraint("user_id", "job_posting_id", name="uq_job_listings_by_url_user_posting"),)

    discovery_url = Column(Text, nullable=True)
    discovery_url_type = Column(String, nullable=True)  # search|company|general
