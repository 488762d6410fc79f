import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class Education(db.Model):
    __tablename__ = "portfolio_education"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    school = db.Column(db.String(255), nullable=False)
    major = db.Column(db.String(255), nullable=False)
    start_year = db.Column(db.String(10))
    end_year = db.Column(db.String(10))
    description = db.Column(db.Text)
    degree = db.Column(db.String(100))
    display_order = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    achievements = db.relationship(
        "EducationAchievement",
        order_by="EducationAchievement.display_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    def to_dict(self):
        data = to_dict(self)
        data["achievements"] = [a.to_dict() for a in self.achievements]
        return data


class EducationAchievement(db.Model):
    __tablename__ = "education_achievements"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    education_id = db.Column(
        db.Uuid, db.ForeignKey("portfolio_education.id", ondelete="CASCADE"), nullable=False, index=True
    )
    achievement = db.Column(db.Text, nullable=False)
    display_order = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)

    def to_dict(self):
        return to_dict(self)
