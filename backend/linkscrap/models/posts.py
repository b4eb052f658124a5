from sqlalchemy import Column, String, Text, Integer, JSON, UniqueConstraint

from linkscrap.db.base import Base
from linkscrap.models.records import CollectedRecordMixin


class PostColumns(CollectedRecordMixin):
    post_id = Column(String, nullable=False, index=True)
    url = Column(Text, nullable=True)
    author_user_id = Column(String, nullable=True)  # provider's user_id of the author
    author_url = Column(Text, nullable=True)
    post_type = Column(String, nullable=True)
    date_posted = Column(String, nullable=True)
    title = Column(Text, nullable=True)
    headline = Column(Text, nullable=True)
    post_text = Column(Text, nullable=True)
    post_text_html = Column(Text, nullable=True)
    hashtags = Column(JSON, nullable=True)
    embedded_links = Column(JSON, nullable=True)
    images = Column(JSON, nullable=True)
    videos = Column(JSON, nullable=True)
    video_duration = Column(String, nullable=True)
    repost = Column(JSON, nullable=True)
    num_likes = Column(Integer, nullable=False, default=0)
    num_comments = Column(Integer, nullable=False, default=0)
    top_visible_comments = Column(JSON, nullable=True)
    user_title = Column(Text, nullable=True)
    author_profile_pic = Column(Text, nullable=True)
    num_connections = Column(Integer, nullable=True)
    user_followers = Column(Integer, nullable=True)
    account_type = Column(String, nullable=True)
    tagged_companies = Column(JSON, nullable=True)
    tagged_people = Column(JSON, nullable=True)
    external_link_data = Column(JSON, nullable=True)
    document_cover_image = Column(Text, nullable=True)
    document_page_count = Column(Integer, nullable=True)


class Post(PostColumns, Base):
    __tablename__ = "linkedin_posts"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_linkedin_posts_user_post"),)


class CompanyPost(PostColumns, Base):
    __tablename__ = "linkedin_posts_discover_company"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_posts_company_user_post"),)

    company_url = Column(Text, nullable=True, index=True)
    company_name = Column(String, nullable=True)


class ProfilePost(PostColumns, Base):
    __tablename__ = "linkedin_post_discover_profile"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_posts_profile_user_post"),)

    profile_url = Column(Text, nullable=True, index=True)
    discovery_start_date = Column(String, nullable=True)
    discovery_end_date = Column(String, nullable=True)


class UrlPost(PostColumns, Base):
    __tablename__ = "linkedin_posts_discover_url"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_posts_url_user_post"),)

    discovery_url = Column(Text, nullable=True)
