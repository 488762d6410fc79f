import uuid

from portfolio.db import db, to_dict
from portfolio.utils import now_utc


class Experience(db.Model):
    __tablename__ = "portfolio_experiences"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String(255), nullable=False)
    company = db.Column(db.String(255), nullable=False)
    location = db.Column(db.String(255), nullable=False)
    start_year = db.Column(db.String(10), nullable=False)
    end_year = db.Column(db.String(10), nullable=False)
    current_job = db.Column(db.Boolean, default=False, nullable=False)
    display_order = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    responsibilities = db.relationship(
        "ExperienceResponsibility",
        order_by="ExperienceResponsibility.display_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    # Written through insert_ignore, read only through the ORM
    skills = db.relationship(
        "ExperienceSkill",
        order_by="ExperienceSkill.skill_name",
        viewonly=True,
        lazy="selectin",
    )

    def to_dict(self):
        data = to_dict(self)
        data["responsibilities"] = [r.to_dict() for r in self.responsibilities]
        data["skills"] = [s.to_dict() for s in self.skills]
        return data


class ExperienceResponsibility(db.Model):
    __tablename__ = "experience_responsibilities"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    experience_id = db.Column(
        db.Uuid, db.ForeignKey("portfolio_experiences.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description = db.Column(db.Text, nullable=False)
    display_order = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc, nullable=False)

    def to_dict(self):
        return to_dict(self)


class ExperienceSkill(db.Model):
    __tablename__ = "experience_skills"

    experience_id = db.Column(
        db.Uuid, db.ForeignKey("portfolio_experiences.id", ondelete="CASCADE"), primary_key=True
    )
    skill_name = db.Column(db.String(100), primary_key=True)

    def to_dict(self):
        return to_dict(self)
