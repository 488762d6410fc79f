"""initial portfolio schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    op.create_table(
        "portfolio_projects",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(500)),
        sa.Column("demo_url", sa.String(500)),
        sa.Column("code_url", sa.String(500)),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="published"),
        *_timestamps(),
    )
    op.create_index("idx_portfolio_projects_order", "portfolio_projects", ["display_order", "created_at"])

    op.create_table(
        "project_tags",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("color", sa.String(7)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "project_tag_relations",
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("portfolio_projects.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("tag_id", sa.Uuid(), sa.ForeignKey("project_tags.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("idx_project_tag_relations_tag", "project_tag_relations", ["tag_id"])

    op.create_table(
        "portfolio_blog_posts",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text()),
        sa.Column("excerpt", sa.Text()),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("featured_image", sa.String(500)),
        sa.Column("publish_date", sa.DateTime(timezone=True)),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("idx_blog_posts_status_publish", "portfolio_blog_posts", ["status", "publish_date"])

    op.create_table(
        "blog_tags",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "blog_post_tags",
        sa.Column("post_id", sa.Uuid(), sa.ForeignKey("portfolio_blog_posts.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("tag_id", sa.Uuid(), sa.ForeignKey("blog_tags.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("idx_blog_post_tags_tag", "blog_post_tags", ["tag_id"])

    op.create_table(
        "portfolio_skills",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.Column("icon_url", sa.String(500)),
        sa.Column("category", sa.String(50)),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.CheckConstraint("value >= 0 AND value <= 100", name="ck_portfolio_skills_value"),
    )

    op.create_table(
        "portfolio_certificates",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("image_url", sa.String(500), nullable=False),
        sa.Column("issue_date", sa.Date()),
        sa.Column("issuer", sa.String(255)),
        sa.Column("credential_url", sa.String(500)),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "portfolio_education",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("school", sa.String(255), nullable=False),
        sa.Column("major", sa.String(255), nullable=False),
        sa.Column("start_year", sa.String(10)),
        sa.Column("end_year", sa.String(10)),
        sa.Column("description", sa.Text()),
        sa.Column("degree", sa.String(100)),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_table(
        "education_achievements",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("education_id", sa.Uuid(), sa.ForeignKey("portfolio_education.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("achievement", sa.Text(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "portfolio_experiences",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("company", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("start_year", sa.String(10), nullable=False),
        sa.Column("end_year", sa.String(10), nullable=False),
        sa.Column("current_job", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_table(
        "experience_responsibilities",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("experience_id", sa.Uuid(), sa.ForeignKey("portfolio_experiences.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "experience_skills",
        sa.Column("experience_id", sa.Uuid(), sa.ForeignKey("portfolio_experiences.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("skill_name", sa.String(100), primary_key=True),
    )

    op.create_table(
        "portfolio_testimonials",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("title", sa.String(150), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("avatar_url", sa.String(500)),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="approved"),
        *_timestamps(),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_portfolio_testimonials_rating"),
    )

    op.create_table(
        "portfolio_sections",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("section_id", sa.String(50), nullable=False, unique=True),
        sa.Column("label", sa.String(100), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        "portfolio_social_links",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("platform", sa.String(50), nullable=False, unique=True),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("icon_name", sa.String(50)),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_table(
        "portfolio_settings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("key", sa.String(100), nullable=False, unique=True),
        sa.Column("value", sa.Text()),
        sa.Column("data_type", sa.String(20), nullable=False, server_default="string"),
        sa.Column("description", sa.Text()),
        *_timestamps(),
    )


def downgrade():
    for table in [
        "portfolio_settings",
        "portfolio_social_links",
        "portfolio_sections",
        "portfolio_testimonials",
        "experience_skills",
        "experience_responsibilities",
        "portfolio_experiences",
        "education_achievements",
        "portfolio_education",
        "portfolio_certificates",
        "portfolio_skills",
        "blog_post_tags",
        "blog_tags",
        "portfolio_blog_posts",
        "project_tag_relations",
        "project_tags",
        "portfolio_projects",
    ]:
        op.drop_table(table)
