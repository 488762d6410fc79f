"""Projects, their images and their tags."""

import structlog

from portfolio.constants import (
    PROJECT_IMAGE_EXTENSIONS,
    PROJECT_IMAGE_MAX_MB,
    PROJECT_STATUSES,
    PROJECTS_FOLDER,
)
from portfolio.services.base import CrudService
from portfolio.services.forms import Field, bind, tag_names_from
from portfolio.uploads import discard_upload, read_upload
from portfolio.utils import parse_uuid

logger = structlog.get_logger('projects')

TAG_FIELDS = [
    Field("name", required=True, max_length=50),
    Field("color", max_length=7),
]


class ProjectService(CrudService):
    id_label = "project ID"
    fields = [
        Field("title", required=True, max_length=200),
        Field("description", required=True),
        Field("image_url", max_length=500),
        Field("demo_url", default="#", max_length=500),
        Field("code_url", default="#", max_length=500),
        Field("display_order", int, default=0, nullable=False),
        Field("is_featured", bool, default=False, nullable=False),
        Field("status", default="published", choices=PROJECT_STATUSES, nullable=False),
    ]

    def __init__(self, repository, upload_gateway):
        super().__init__(repository)
        self.uploads = upload_gateway

    def _store_image(self, image):
        uploaded = read_upload(image, "image", PROJECT_IMAGE_MAX_MB, PROJECT_IMAGE_EXTENSIONS)
        return self.uploads.upload(uploaded.data, uploaded.filename, PROJECTS_FOLDER, uploaded.content_type)

    def list(self, with_tags=True):
        if with_tags:
            projects = self.repository.list_all_with_tags()
        else:
            projects = self.repository.list_all()
        return [project.to_dict() for project in projects]

    def get(self, id, with_tags=True):
        project_id = self._id(id)
        if with_tags:
            return self.repository.get_by_id_with_tags(project_id).to_dict()
        return self.repository.get_by_id(project_id).to_dict()

    def create(self, payload, image=None):
        values = bind(payload, self.fields)
        tag_names = tag_names_from(payload)

        image_url = None
        if image is not None:
            image_url = self._store_image(image)
            values["image_url"] = image_url

        try:
            project = self.repository.create_with_tags(values, tag_names or [])
        except Exception:
            discard_upload(self.uploads, image_url, "project create failed")
            raise

        logger.info("project_created", project_id=str(project.id), tags=len(project.tags))
        return project.to_dict()

    def update(self, id, payload, image=None):
        project_id = self._id(id)
        values = bind(payload, self.fields, partial=True)
        tag_names = tag_names_from(payload)
        old_image_url = self.repository.get_by_id(project_id).image_url

        new_image_url = None
        if image is not None:
            new_image_url = self._store_image(image)
            values["image_url"] = new_image_url

        try:
            project = self.repository.update_with_tags(project_id, values, tag_names)
        except Exception:
            discard_upload(self.uploads, new_image_url, "project update failed")
            raise

        if new_image_url and old_image_url and old_image_url != new_image_url:
            discard_upload(self.uploads, old_image_url, "replaced by a new image")
        return project.to_dict()

    def delete(self, id):
        snapshot = self.repository.delete_with_tags(self._id(id))
        discard_upload(self.uploads, snapshot.get("image_url"), "project deleted")
        logger.info("project_deleted", project_id=snapshot["id"])
        return snapshot

    # Tags

    def list_tags(self):
        return [tag.to_dict() for tag in self.repository.get_all_tags()]

    def create_tag(self, payload):
        values = bind(payload, TAG_FIELDS)
        name = values.pop("name")
        return self.repository.create_tag(name, **values).to_dict()

    def delete_tag(self, tag_id):
        return self.repository.delete_tag(parse_uuid(tag_id, "tag ID"))

    def projects_by_tag(self, tag_id):
        projects = self.repository.list_by_tag(parse_uuid(tag_id, "tag ID"))
        return [project.to_dict() for project in projects]

    def project_tags(self, project_id):
        return [tag.to_dict() for tag in self.repository.get_tags(self._id(project_id))]

    def add_tag(self, project_id, payload):
        values = bind(payload, [Field("tag_id", required=True)])
        tag_id = parse_uuid(values["tag_id"], "tag ID")
        return self.repository.add_tag(self._id(project_id), tag_id).to_dict()

    def remove_tag(self, project_id, tag_id):
        project = self.repository.remove_tag(self._id(project_id), parse_uuid(tag_id, "tag ID"))
        return project.to_dict()
