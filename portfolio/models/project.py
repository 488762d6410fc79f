import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class Project(db.Model):
    __tablename__ = "portfolio_projects"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.String(500))
    demo_url = db.Column(db.String(500), default="#")
    code_url = db.Column(db.String(500), default="#")
    display_order = db.Column(db.Integer, default=0, nullable=False)
    is_featured = db.Column(db.Boolean, default=False, nullable=False)
    status = db.Column(db.String(20), default="published", nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    # Rebuilt from project_tag_relations on every read, never persisted
    tags = None

    __table_args__ = (
        db.Index("idx_portfolio_projects_order", "display_order", "created_at"),
    )

    def to_dict(self):
        data = to_dict(self)
        if self.tags is not None:
            data["tags"] = [tag.to_dict() for tag in self.tags]
        return data


class ProjectTag(db.Model):
    __tablename__ = "project_tags"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(50), unique=True, nullable=False)
    color = db.Column(db.String(7))
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)

    def to_dict(self):
        return to_dict(self)


class ProjectTagRelation(db.Model):
    __tablename__ = "project_tag_relations"

    project_id = db.Column(
        db.Uuid, db.ForeignKey("portfolio_projects.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id = db.Column(db.Uuid, db.ForeignKey("project_tags.id", ondelete="CASCADE"), primary_key=True)

    __table_args__ = (
        db.Index("idx_project_tag_relations_tag", "tag_id"),
    )
