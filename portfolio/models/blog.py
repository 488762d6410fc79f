import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class BlogPost(db.Model):
    __tablename__ = "portfolio_blog_posts"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text)
    excerpt = db.Column(db.Text)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    featured_image = db.Column(db.String(500))
    publish_date = db.Column(db.DateTime(timezone=True))
    status = db.Column(db.String(20), default="draft", nullable=False)
    view_count = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    # Rebuilt from blog_post_tags on every read, never persisted
    tags = None

    __table_args__ = (
        db.Index("idx_blog_posts_status_publish", "status", "publish_date"),
    )

    def to_dict(self):
        data = to_dict(self)
        if self.tags is not None:
            data["tags"] = [tag.to_dict() for tag in self.tags]
        return data


class BlogTag(db.Model):
    __tablename__ = "blog_tags"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(50), unique=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)

    def to_dict(self):
        return to_dict(self)


class BlogPostTag(db.Model):
    __tablename__ = "blog_post_tags"

    post_id = db.Column(
        db.Uuid, db.ForeignKey("portfolio_blog_posts.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id = db.Column(db.Uuid, db.ForeignKey("blog_tags.id", ondelete="CASCADE"), primary_key=True)

    __table_args__ = (
        db.Index("idx_blog_post_tags_tag", "tag_id"),
    )
