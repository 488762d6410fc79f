import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class Setting(db.Model):
    __tablename__ = "portfolio_settings"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    key = db.Column(db.String(100), unique=True, nullable=False)
    value = db.Column(db.Text)
    data_type = db.Column(db.String(20), default="string", nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    def to_dict(self):
        return to_dict(self)
