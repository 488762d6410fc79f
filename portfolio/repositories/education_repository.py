"""
Repository for Education database operations, achievements included
"""

from portfolio.models import Education, EducationAchievement
from portfolio.repositories.base import CrudRepository, unit_of_work


class EducationRepository(CrudRepository):
    model = Education
    entity_name = "Education"

    @staticmethod
    def _achievements(items):
        return [
            EducationAchievement(achievement=item["achievement"], display_order=item.get("display_order", 0))
            for item in items
        ]

    def create_with_achievements(self, fields, achievements=None):
        with unit_of_work(self.session):
            education = Education(**fields)
            education.achievements = self._achievements(achievements or [])
            self.session.add(education)
            self.session.flush()
        return education

    def update_with_achievements(self, id, changes, achievements=None):
        """`achievements=None` keeps the current list, a list replaces it."""
        with unit_of_work(self.session):
            education = self.get_by_id(id)
            self._apply(education, changes)
            if achievements is not None:
                # delete-orphan cascade removes the previous rows
                education.achievements = self._achievements(achievements)
            self.session.flush()
        return education
