"""
Repository for Testimonial database operations
"""

from portfolio.models import Testimonial
from portfolio.repositories.base import CrudRepository


class TestimonialRepository(CrudRepository):
    model = Testimonial
    entity_name = "Testimonial"

    def get_featured(self):
        return self.filter_by(is_featured=True)

    def get_by_status(self, status):
        return self.filter_by(status=status)
