"""
Repository for Experience database operations with responsibilities and skills
"""

from portfolio.db import insert_ignore
from portfolio.models import Experience, ExperienceResponsibility, ExperienceSkill
from portfolio.repositories.base import CrudRepository, unit_of_work


class ExperienceRepository(CrudRepository):
    model = Experience
    entity_name = "Experience"

    @staticmethod
    def _responsibilities(items):
        return [
            ExperienceResponsibility(description=item["description"], display_order=item.get("display_order", 0))
            for item in items
        ]

    def _replace_skills(self, experience_id, skill_names):
        self.session.query(ExperienceSkill).filter(ExperienceSkill.experience_id == experience_id).delete(
            synchronize_session=False
        )
        rows = [{"experience_id": experience_id, "skill_name": name} for name in skill_names]
        insert_ignore(self.session, ExperienceSkill.__table__, rows)

    def create_with_relations(self, fields, responsibilities=None, skills=None):
        with unit_of_work(self.session):
            experience = Experience(**fields)
            experience.responsibilities = self._responsibilities(responsibilities or [])
            self.session.add(experience)
            self.session.flush()
            self._replace_skills(experience.id, skills or [])
        return experience

    def update_with_relations(self, id, changes, responsibilities=None, skills=None):
        with unit_of_work(self.session):
            experience = self.get_by_id(id)
            self._apply(experience, changes)
            if responsibilities is not None:
                experience.responsibilities = self._responsibilities(responsibilities)
            self.session.flush()
            if skills is not None:
                self._replace_skills(experience.id, skills)
        return experience

    def delete(self, id):
        with unit_of_work(self.session):
            experience = self.get_by_id(id)
            snapshot = experience.to_dict()
            self.session.query(ExperienceSkill).filter(ExperienceSkill.experience_id == experience.id).delete(
                synchronize_session=False
            )
            self.session.delete(experience)
        return snapshot
