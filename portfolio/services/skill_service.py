"""Skills and their icons."""

from portfolio.constants import SKILL_ICON_EXTENSIONS, SKILL_ICON_MAX_MB, SKILLS_FOLDER
from portfolio.services.base import CrudService
from portfolio.services.forms import Field, bind
from portfolio.uploads import discard_upload, read_upload


class SkillService(CrudService):
    id_label = "skill ID"
    fields = [
        Field("name", required=True, max_length=100),
        Field("value", int, required=True, min_value=0, max_value=100),
        Field("icon_url", max_length=500),
        Field("category", default="programming", max_length=50),
        Field("display_order", int, default=0, nullable=False),
        Field("is_featured", bool, default=False, nullable=False),
    ]

    def __init__(self, repository, upload_gateway):
        super().__init__(repository)
        self.uploads = upload_gateway

    def _store_icon(self, icon):
        uploaded = read_upload(icon, "icon", SKILL_ICON_MAX_MB, SKILL_ICON_EXTENSIONS)
        return self.uploads.upload(uploaded.data, uploaded.filename, SKILLS_FOLDER, uploaded.content_type)

    def featured(self):
        return [skill.to_dict() for skill in self.repository.get_featured()]

    def by_category(self, category):
        return [skill.to_dict() for skill in self.repository.get_by_category(category)]

    def create(self, payload, icon=None):
        values = bind(payload, self.fields)
        icon_url = None
        if icon is not None:
            icon_url = self._store_icon(icon)
            values["icon_url"] = icon_url

        try:
            return self.repository.create(**values).to_dict()
        except Exception:
            discard_upload(self.uploads, icon_url, "skill create failed")
            raise

    def update(self, id, payload, icon=None):
        skill_id = self._id(id)
        values = bind(payload, self.fields, partial=True)
        old_icon_url = self.repository.get_by_id(skill_id).icon_url

        new_icon_url = None
        if icon is not None:
            new_icon_url = self._store_icon(icon)
            values["icon_url"] = new_icon_url

        try:
            skill = self.repository.update(skill_id, **values)
        except Exception:
            discard_upload(self.uploads, new_icon_url, "skill update failed")
            raise

        if new_icon_url and old_icon_url and old_icon_url != new_icon_url:
            discard_upload(self.uploads, old_icon_url, "replaced by a new icon")
        return skill.to_dict()

    def delete(self, id):
        snapshot = self.repository.delete(self._id(id))
        discard_upload(self.uploads, snapshot.get("icon_url"), "skill deleted")
        return snapshot
