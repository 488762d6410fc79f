"""
Repository for Skill database operations
"""

from portfolio.models import Skill
from portfolio.repositories.base import CrudRepository


class SkillRepository(CrudRepository):
    model = Skill
    entity_name = "Skill"
    unique_field = "name"

    def get_featured(self):
        return self.filter_by(is_featured=True)

    def get_by_category(self, category):
        return self.filter_by(category=category)
