import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class Skill(db.Model):
    __tablename__ = "portfolio_skills"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(100), unique=True, nullable=False)
    value = db.Column(db.Integer, nullable=False, default=0)
    icon_url = db.Column(db.String(500))
    category = db.Column(db.String(50), default="programming")
    display_order = db.Column(db.Integer, default=0, nullable=False)
    is_featured = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        db.CheckConstraint("value >= 0 AND value <= 100", name="ck_portfolio_skills_value"),
    )

    def to_dict(self):
        return to_dict(self)
