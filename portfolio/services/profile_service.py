"""Education, experiences and testimonials."""

from portfolio.constants import TESTIMONIAL_STATUSES
from portfolio.exceptions import ValidationException
from portfolio.services.base import CrudService
from portfolio.services.forms import Field, bind, child_items

ACHIEVEMENT_FIELDS = [
    Field("achievement", required=True),
    Field("display_order", int, default=0, nullable=False),
]

RESPONSIBILITY_FIELDS = [
    Field("description", required=True),
    Field("display_order", int, default=0, nullable=False),
]


class EducationService(CrudService):
    id_label = "education ID"
    fields = [
        Field("school", required=True, max_length=255),
        Field("major", required=True, max_length=255),
        Field("start_year", max_length=10),
        Field("end_year", max_length=10),
        Field("description"),
        Field("degree", max_length=100),
        Field("display_order", int, default=0, nullable=False),
    ]

    def create(self, payload):
        values = bind(payload, self.fields)
        achievements = child_items(payload, "achievements", ACHIEVEMENT_FIELDS)
        return self.repository.create_with_achievements(values, achievements).to_dict()

    def update(self, id, payload):
        education_id = self._id(id)
        values = bind(payload, self.fields, partial=True)
        achievements = child_items(payload, "achievements", ACHIEVEMENT_FIELDS)
        return self.repository.update_with_achievements(education_id, values, achievements).to_dict()


def skill_names_from(payload):
    """Experience skills as a de-duplicated list of names, None when absent."""
    if "skills" not in payload:
        return None
    raw = payload["skills"] or []
    if not isinstance(raw, list):
        raise ValidationException("skills: must be a list", field="skills")

    names = []
    for item in raw:
        if isinstance(item, dict):
            item = item.get("skill_name")
        if not isinstance(item, str) or not item.strip():
            raise ValidationException("skills: every skill needs a skill_name", field="skills")
        names.append(item)
    return list(dict.fromkeys(names))


class ExperienceService(CrudService):
    id_label = "experience ID"
    fields = [
        Field("title", required=True, max_length=255),
        Field("company", required=True, max_length=255),
        Field("location", required=True, max_length=255),
        Field("start_year", required=True, max_length=10),
        Field("end_year", required=True, max_length=10),
        Field("current_job", bool, default=False, nullable=False),
        Field("display_order", int, default=0, nullable=False),
    ]

    def create(self, payload):
        values = bind(payload, self.fields)
        responsibilities = child_items(payload, "responsibilities", RESPONSIBILITY_FIELDS)
        experience = self.repository.create_with_relations(values, responsibilities, skill_names_from(payload))
        return experience.to_dict()

    def update(self, id, payload):
        experience_id = self._id(id)
        values = bind(payload, self.fields, partial=True)
        responsibilities = child_items(payload, "responsibilities", RESPONSIBILITY_FIELDS)
        experience = self.repository.update_with_relations(
            experience_id, values, responsibilities, skill_names_from(payload)
        )
        return experience.to_dict()


class TestimonialService(CrudService):
    id_label = "testimonial ID"
    fields = [
        Field("name", required=True, max_length=100),
        Field("title", required=True, max_length=150),
        Field("message", required=True),
        Field("avatar_url", max_length=500),
        Field("rating", int, required=True, min_value=1, max_value=5),
        Field("is_featured", bool, default=False, nullable=False),
        Field("display_order", int, default=0, nullable=False),
        Field("status", default="approved", choices=TESTIMONIAL_STATUSES, nullable=False),
    ]

    def featured(self):
        return [t.to_dict() for t in self.repository.get_featured()]

    def by_status(self, status):
        if status not in TESTIMONIAL_STATUSES:
            raise ValidationException(
                f"status: must be one of {', '.join(TESTIMONIAL_STATUSES)}", field="status"
            )
        return [t.to_dict() for t in self.repository.get_by_status(status)]
