from sqlalchemy import Column, String, Text, Integer, Boolean, JSON, UniqueConstraint

from linkscrap.db.base import Base
from linkscrap.models.records import CollectedRecordMixin


class ProfileColumns(CollectedRecordMixin):
    linkedin_num_id = Column(String, nullable=False, index=True)
    linkedin_id = Column(String, nullable=True)
    url = Column(Text, nullable=True)
    name = Column(String, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    country_code = Column(String, nullable=True)
    city = Column(String, nullable=True)
    about = Column(Text, nullable=True)
    followers = Column(Integer, nullable=False, default=0)
    connections = Column(Integer, nullable=False, default=0)
    position = Column(Text, nullable=True)
    current_company = Column(JSON, nullable=True)
    current_company_name = Column(String, nullable=True)
    current_company_company_id = Column(String, nullable=True)
    experience = Column(JSON, nullable=True)
    education = Column(JSON, nullable=True)
    educations_details = Column(Text, nullable=True)
    courses = Column(JSON, nullable=True)
    certifications = Column(JSON, nullable=True)
    honors_and_awards = Column(JSON, nullable=True)
    volunteer_experience = Column(JSON, nullable=True)
    organizations = Column(JSON, nullable=True)
    recommendations_count = Column(Integer, nullable=True)
    recommendations = Column(JSON, nullable=True)
    languages = Column(JSON, nullable=True)
    projects = Column(JSON, nullable=True)
    patents = Column(JSON, nullable=True)
    publications = Column(JSON, nullable=True)
    posts = Column(JSON, nullable=True)
    activity = Column(JSON, nullable=True)
    avatar = Column(Text, nullable=True)
    default_avatar = Column(Boolean, nullable=False, default=False)
    banner_image = Column(Text, nullable=True)
    similar_profiles = Column(JSON, nullable=True)
    people_also_viewed = Column(JSON, nullable=True)
    memorialized_account = Column(Boolean, nullable=False, default=False)
    bio_links = Column(JSON, nullable=True)


class PeopleProfile(ProfileColumns, Base):
    __tablename__ = "people_profiles"
    __table_args__ = (UniqueConstraint("user_id", "linkedin_num_id", name="uq_people_profiles_user_linkedin"),)


class DiscoveredProfile(ProfileColumns, Base):
    __tablename__ = "people_profiles_discovered"
    __table_args__ = (UniqueConstraint("user_id", "linkedin_num_id", name="uq_people_profiles_discovered_user_linkedin"),)

    search_first_name = Column(String, nullable=True)
    search_last_name = Column(String, nullable=True)


class PeopleSearchResult(CollectedRecordMixin, Base):
    __tablename__ = "linkedin_people_search_collect"
    __table_args__ = (UniqueConstraint("user_id", "url", name="uq_people_search_user_url"),)

    url = Column(Text, nullable=False)
    name = Column(String, nullable=True)
    subtitle = Column(Text, nullable=True)
    location = Column(String, nullable=True, index=True)
    experience = Column(Text, nullable=True)
    education = Column(Text, nullable=True)
    avatar = Column(Text, nullable=True)
    search_first_name = Column(String, nullable=True)
    search_last_name = Column(String, nullable=True)
    search_url = Column(Text, nullable=True)
