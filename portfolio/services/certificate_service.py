"""Certificates and their scanned images."""

from portfolio.constants import CERTIFICATE_IMAGE_EXTENSIONS, CERTIFICATE_IMAGE_MAX_MB, CERTIFICATES_FOLDER
from portfolio.exceptions import ValidationException
from portfolio.services.base import CrudService
from portfolio.services.forms import Field, bind
from portfolio.uploads import discard_upload, read_upload

_COMMON_FIELDS = [
    Field("name", required=True, max_length=255),
    Field("issue_date", "date"),
    Field("issuer", default="-", max_length=255),
    Field("credential_url", max_length=500),
    Field("display_order", int, default=0, nullable=False),
]


class CertificateService(CrudService):
    id_label = "certificate ID"
    fields = _COMMON_FIELDS + [Field("image_url", required=True, max_length=500)]
    upload_fields = _COMMON_FIELDS

    def __init__(self, repository, upload_gateway):
        super().__init__(repository)
        self.uploads = upload_gateway

    def _store_image(self, image):
        uploaded = read_upload(image, "image", CERTIFICATE_IMAGE_MAX_MB, CERTIFICATE_IMAGE_EXTENSIONS)
        return self.uploads.upload(uploaded.data, uploaded.filename, CERTIFICATES_FOLDER, uploaded.content_type)

    def create_with_image(self, payload, image):
        if image is None:
            raise ValidationException("image: file is required", field="image")
        values = bind(payload, self.upload_fields)
        values["image_url"] = self._store_image(image)

        try:
            return self.repository.create(**values).to_dict()
        except Exception:
            discard_upload(self.uploads, values["image_url"], "certificate create failed")
            raise

    def update(self, id, payload, image=None):
        certificate_id = self._id(id)
        values = bind(payload, self.fields, partial=True)
        old_image_url = self.repository.get_by_id(certificate_id).image_url

        new_image_url = None
        if image is not None:
            new_image_url = self._store_image(image)
            values["image_url"] = new_image_url

        try:
            certificate = self.repository.update(certificate_id, **values)
        except Exception:
            discard_upload(self.uploads, new_image_url, "certificate update failed")
            raise

        if new_image_url and old_image_url != new_image_url:
            discard_upload(self.uploads, old_image_url, "replaced by a new image")
        return certificate.to_dict()

    def delete(self, id):
        # Row first: a dangling file is harmless, a dangling row is not
        snapshot = self.repository.delete(self._id(id))
        discard_upload(self.uploads, snapshot.get("image_url"), "certificate deleted")
        return snapshot
