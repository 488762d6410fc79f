"""Generic CRUD service: request binding in front of a repository."""

from portfolio.services.forms import bind
from portfolio.utils import parse_uuid


class CrudService:
    fields = []
    id_label = "ID"

    def __init__(self, repository):
        self.repository = repository

    def _id(self, id):
        return parse_uuid(id, self.id_label)

    def list(self):
        return [item.to_dict() for item in self.repository.get_all()]

    def get(self, id):
        return self.repository.get_by_id(self._id(id)).to_dict()

    def create(self, payload):
        values = bind(payload, self.fields)
        return self.repository.create(**values).to_dict()

    def update(self, id, payload):
        item_id = self._id(id)
        values = bind(payload, self.fields, partial=True)
        return self.repository.update(item_id, **values).to_dict()

    def delete(self, id):
        return self.repository.delete(self._id(id))
