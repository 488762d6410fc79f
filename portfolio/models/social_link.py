import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class SocialLink(db.Model):
    __tablename__ = "portfolio_social_links"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    platform = db.Column(db.String(50), unique=True, nullable=False)
    url = db.Column(db.String(500), nullable=False)
    icon_name = db.Column(db.String(50))
    display_order = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    def to_dict(self):
        return to_dict(self)
