"""collection tables

Revision ID: 3f1c9a7d2e10
Revises:
Create Date: 2026-10-19 10:12:44.518201

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def jsonb(name):
    return sa.Column(name, postgresql.JSONB(astext_type=sa.Text()), nullable=True)


def record_columns():
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("input_url", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def profile_columns():
    return [
        sa.Column("linkedin_num_id", sa.String(), nullable=False),
        sa.Column("linkedin_id", sa.String(), nullable=True),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("country_code", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("about", sa.Text(), nullable=True),
        sa.Column("followers", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("connections", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("position", sa.Text(), nullable=True),
        jsonb("current_company"),
        sa.Column("current_company_name", sa.String(), nullable=True),
        sa.Column("current_company_company_id", sa.String(), nullable=True),
        jsonb("experience"),
        jsonb("education"),
        sa.Column("educations_details", sa.Text(), nullable=True),
        jsonb("courses"),
        jsonb("certifications"),
        jsonb("honors_and_awards"),
        jsonb("volunteer_experience"),
        jsonb("organizations"),
        sa.Column("recommendations_count", sa.Integer(), nullable=True),
        jsonb("recommendations"),
        jsonb("languages"),
        jsonb("projects"),
        jsonb("patents"),
        jsonb("publications"),
        jsonb("posts"),
        jsonb("activity"),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("default_avatar", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("banner_image", sa.Text(), nullable=True),
        jsonb("similar_profiles"),
        jsonb("people_also_viewed"),
        sa.Column("memorialized_account", sa.Boolean(), nullable=False, server_default=sa.false()),
        jsonb("bio_links"),
    ]


def job_columns():
    return [
        sa.Column("job_posting_id", sa.String(), nullable=False),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("title_id", sa.String(), nullable=True),
        sa.Column("company_id", sa.String(), nullable=True),
        sa.Column("job_title", sa.Text(), nullable=True),
        sa.Column("company_name", sa.String(), nullable=True),
        sa.Column("company_url", sa.Text(), nullable=True),
        sa.Column("company_logo", sa.Text(), nullable=True),
        sa.Column("job_location", sa.String(), nullable=True),
        sa.Column("country_code", sa.String(), nullable=True),
        sa.Column("job_seniority_level", sa.String(), nullable=True),
        sa.Column("job_employment_type", sa.String(), nullable=True),
        sa.Column("job_industries", sa.Text(), nullable=True),
        sa.Column("job_function", sa.Text(), nullable=True),
        sa.Column("job_summary", sa.Text(), nullable=True),
        sa.Column("job_num_applicants", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("application_availability", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("apply_link", sa.Text(), nullable=True),
        jsonb("base_salary"),
        sa.Column("job_base_pay_range", sa.String(), nullable=True),
        sa.Column("job_posted_date", sa.String(), nullable=True),
        sa.Column("job_posted_time", sa.String(), nullable=True),
        jsonb("job_poster"),
        sa.Column("job_description_formatted", sa.Text(), nullable=True),
        jsonb("salary_standards"),
        jsonb("discovery_input"),
    ]


def post_columns():
    return [
        sa.Column("post_id", sa.String(), nullable=False),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("author_user_id", sa.String(), nullable=True),
        sa.Column("author_url", sa.Text(), nullable=True),
        sa.Column("post_type", sa.String(), nullable=True),
        sa.Column("date_posted", sa.String(), nullable=True),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("headline", sa.Text(), nullable=True),
        sa.Column("post_text", sa.Text(), nullable=True),
        sa.Column("post_text_html", sa.Text(), nullable=True),
        jsonb("hashtags"),
        jsonb("embedded_links"),
        jsonb("images"),
        jsonb("videos"),
        sa.Column("video_duration", sa.String(), nullable=True),
        jsonb("repost"),
        sa.Column("num_likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("num_comments", sa.Integer(), nullable=False, server_default="0"),
        jsonb("top_visible_comments"),
        sa.Column("user_title", sa.Text(), nullable=True),
        sa.Column("author_profile_pic", sa.Text(), nullable=True),
        sa.Column("num_connections", sa.Integer(), nullable=True),
        sa.Column("user_followers", sa.Integer(), nullable=True),
        sa.Column("account_type", sa.String(), nullable=True),
        jsonb("tagged_companies"),
        jsonb("tagged_people"),
        jsonb("external_link_data"),
        sa.Column("document_cover_image", sa.Text(), nullable=True),
        sa.Column("document_page_count", sa.Integer(), nullable=True),
    ]


def create_collected(table, key, constraint, columns, indexes=()):
    op.create_table(
        table,
        *record_columns(),
        *columns,
        sa.UniqueConstraint("user_id", key, name=constraint),
    )
    for col in ("user_id", key, *indexes):
        op.create_index(f"ix_{table}_{col}", table, [col])


def upgrade() -> None:
    create_collected("people_profiles", "linkedin_num_id", "uq_people_profiles_user_linkedin", profile_columns())
    create_collected(
        "people_profiles_discovered",
        "linkedin_num_id",
        "uq_people_profiles_discovered_user_linkedin",
        profile_columns() + [
            sa.Column("search_first_name", sa.String(), nullable=True),
            sa.Column("search_last_name", sa.String(), nullable=True),
        ],
    )
    create_collected(
        "linkedin_people_search_collect",
        "url",
        "uq_people_search_user_url",
        [
            sa.Column("url", sa.Text(), nullable=False),
            sa.Column("name", sa.String(), nullable=True),
            sa.Column("subtitle", sa.Text(), nullable=True),
            sa.Column("location", sa.String(), nullable=True),
            sa.Column("experience", sa.Text(), nullable=True),
            sa.Column("education", sa.Text(), nullable=True),
            sa.Column("avatar", sa.Text(), nullable=True),
            sa.Column("search_first_name", sa.String(), nullable=True),
            sa.Column("search_last_name", sa.String(), nullable=True),
            sa.Column("search_url", sa.Text(), nullable=True),
        ],
        indexes=("location",),
    )

    create_collected(
        "company_info",
        "company_id",
        "uq_company_info_user_company",
        [
            sa.Column("company_id", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=True),
            sa.Column("website", sa.Text(), nullable=True),
            sa.Column("phone", sa.String(), nullable=True),
            sa.Column("about", sa.Text(), nullable=True),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("url", sa.Text(), nullable=True),
            sa.Column("image_url", sa.Text(), nullable=True),
            sa.Column("background_image_url", sa.Text(), nullable=True),
            sa.Column("followers", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("employees_in_linkedin", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("company_size", sa.String(), nullable=True),
            sa.Column("organization_type", sa.String(), nullable=True),
            jsonb("industries"),
            sa.Column("specialties", sa.Text(), nullable=True),
            sa.Column("headquarters", sa.String(), nullable=True),
            sa.Column("founded", sa.String(), nullable=True),
            jsonb("locations"),
            jsonb("funding"),
            jsonb("employees"),
            jsonb("updates"),
            jsonb("similar_companies"),
            jsonb("affiliated"),
        ],
    )

    create_collected("job_listings", "job_posting_id", "uq_job_listings_user_posting", job_columns())
    create_collected(
        "job_listings_discovered",
        "job_posting_id",
        "uq_job_listings_discovered_user_posting",
        job_columns() + [
            sa.Column("search_keyword", sa.String(), nullable=True),
            sa.Column("search_location", sa.String(), nullable=True),
            sa.Column("search_country", sa.String(), nullable=True),
            sa.Column("search_time_range", sa.String(), nullable=True),
            sa.Column("search_job_type", sa.String(), nullable=True),
            sa.Column("search_experience_level", sa.String(), nullable=True),
            sa.Column("search_remote", sa.String(), nullable=True),
            sa.Column("search_company", sa.String(), nullable=True),
            sa.Column("search_location_radius", sa.String(), nullable=True),
        ],
        indexes=("search_keyword", "search_location"),
    )
    create_collected(
        "job_listings_discovered_by_url",
        "job_posting_id",
        "uq_job_listings_by_url_user_posting",
        job_columns() + [
            sa.Column("discovery_url", sa.Text(), nullable=True),
            sa.Column("discovery_url_type", sa.String(), nullable=True),
        ],
    )

    create_collected("linkedin_posts", "post_id", "uq_linkedin_posts_user_post", post_columns())
    create_collected(
        "linkedin_posts_discover_company",
        "post_id",
        "uq_posts_company_user_post",
        post_columns() + [
            sa.Column("company_url", sa.Text(), nullable=True),
            sa.Column("company_name", sa.String(), nullable=True),
        ],
        indexes=("company_url",),
    )
    create_collected(
        "linkedin_post_discover_profile",
        "post_id",
        "uq_posts_profile_user_post",
        post_columns() + [
            sa.Column("profile_url", sa.Text(), nullable=True),
            sa.Column("discovery_start_date", sa.String(), nullable=True),
            sa.Column("discovery_end_date", sa.String(), nullable=True),
        ],
        indexes=("profile_url",),
    )
    create_collected(
        "linkedin_posts_discover_url",
        "post_id",
        "uq_posts_url_user_post",
        post_columns() + [sa.Column("discovery_url", sa.Text(), nullable=True)],
    )


def downgrade() -> None:
    op.drop_table("linkedin_posts_discover_url")
    op.drop_table("linkedin_post_discover_profile")
    op.drop_table("linkedin_posts_discover_company")
    op.drop_table("linkedin_posts")
    op.drop_table("job_listings_discovered_by_url")
    op.drop_table("job_listings_discovered")
    op.drop_table("job_listings")
    op.drop_table("company_info")
    op.drop_table("linkedin_people_search_collect")
    op.drop_table("people_profiles_discovered")
    op.drop_table("people_profiles")
