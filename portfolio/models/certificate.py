import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class Certificate(db.Model):
    __tablename__ = "portfolio_certificates"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(255), nullable=False)
    image_url = db.Column(db.String(500), nullable=False)
    issue_date = db.Column(db.Date)
    issuer = db.Column(db.String(255), default="-")
    credential_url = db.Column(db.String(500))
    display_order = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    def to_dict(self):
        return to_dict(self)
