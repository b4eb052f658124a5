from sqlalchemy import Column, String, Text, Integer, JSON, UniqueConstraint

from linkscrap.db.base import Base
from linkscrap.models.records import CollectedRecordMixin


class CompanyInfo(CollectedRecordMixin, Base):
    __tablename__ = "company_info"
    __table_args__ = (UniqueConstraint("user_id", "company_id", name="uq_company_info_user_company"),)

    company_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=True)
    website = Column(Text, nullable=True)
    phone = Column(String, nullable=True)
    about = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    url = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    background_image_url = Column(Text, nullable=True)
    followers = Column(Integer, nullable=False, default=0)
    employees_in_linkedin = Column(Integer, nullable=False, default=0)
    company_size = Column(String, nullable=True)
    organization_type = Column(String, nullable=True)
    industries = Column(JSON, nullable=True)  # list[str]
    specialties = Column(Text, nullable=True)
    headquarters = Column(String, nullable=True)
    founded = Column(String, nullable=True)
    locations = Column(JSON, nullable=True)
    funding = Column(JSON, nullable=True)
    employees = Column(JSON, nullable=True)
    updates = Column(JSON, nullable=True)
    similar_companies = Column(JSON, nullable=True)
    affiliated = Column(JSON, nullable=True)
