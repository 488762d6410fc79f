import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class Testimonial(db.Model):
    __tablename__ = "portfolio_testimonials"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(100), nullable=False)
    title = db.Column(db.String(150), nullable=False)
    message = db.Column(db.Text, nullable=False)
    avatar_url = db.Column(db.String(500))
    rating = db.Column(db.Integer, nullable=False, default=5)
    is_featured = db.Column(db.Boolean, default=False, nullable=False)
    display_order = db.Column(db.Integer, default=0, nullable=False)
    status = db.Column(db.String(20), default="approved", nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    __table_args__ = (
        db.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_portfolio_testimonials_rating"),
    )

    def to_dict(self):
        return to_dict(self)
