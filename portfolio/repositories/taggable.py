"""
Taggable owners - tag stores, association tables and the tag-set replacement
used by projects and blog posts.

A tag family is a (tag table, association table) pair. Owners never hold tags
directly: the association table is the single source of truth and the owner's
`tags` attribute is rebuilt from it on every read.
"""

import logging

from sqlalchemy.exc import IntegrityError

from portfolio.constants import TAG_NAME_MAX_LENGTH
from portfolio.db import db, insert_ignore
from portfolio.exceptions import ConflictException, NotFoundException, ValidationException
from portfolio.metrics import tags_created_total
from portfolio.repositories.base import CrudRepository, unit_of_work

logger = logging.getLogger("main")


def normalize_tag_name(name):
    """
    Tag name policy. Names are validated and kept literal, so "Go" and "go"
    are different tags.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationException("Tag name must be a non-empty string", field="tags")
    if len(name) > TAG_NAME_MAX_LENGTH:
        raise ValidationException(
            f"Tag name '{name[:20]}...' exceeds {TAG_NAME_MAX_LENGTH} characters", field="tags"
        )
    return name


def fold_tag_name(name):
    """Alternative policy: trimmed, lower-cased names."""
    return normalize_tag_name(name).strip().lower()


class TagStore:
    """Get-or-create access to one tag family"""

    def __init__(self, tag_model, family, session=None, normalizer=normalize_tag_name):
        self.model = tag_model
        self.family = family
        self.session = session or db.session
        self.normalize = normalizer

    def find_by_name(self, name):
        return self.session.query(self.model).filter(self.model.name == name).one_or_none()

    def get(self, tag_id):
        tag = self.session.get(self.model, tag_id)
        if tag is None:
            raise NotFoundException(f"Tag with ID '{tag_id}' not found")
        return tag

    def get_all(self):
        return self.session.query(self.model).order_by(self.model.name.asc()).all()

    def resolve(self, name):
        """
        Return the tag called `name`, inserting it when missing.
        Runs inside the caller's transaction and never commits. A concurrent
        insert of the same name is absorbed by re-reading the winner's row.
        """
        name = self.normalize(name)
        tag = self.find_by_name(name)
        if tag is not None:
            return tag

        tag = self.model(name=name)
        try:
            with self.session.begin_nested():
                self.session.add(tag)
        except IntegrityError:
            logger.info(f"Tag '{name}' ({self.family}) created concurrently, reusing existing row")
            tag = self.find_by_name(name)
            if tag is None:
                raise
            return tag

        tags_created_total.labels(family=self.family).inc()
        return tag

    def create(self, name, **attributes):
        """Explicit creation: a duplicate name is a conflict, not a reuse."""
        name = self.normalize(name)
        message = f"Tag '{name}' already exists"
        with unit_of_work(self.session, message):
            if self.find_by_name(name) is not None:
                raise ConflictException(message)
            tag = self.model(name=name, **attributes)
            self.session.add(tag)
            self.session.flush()
        tags_created_total.labels(family=self.family).inc()
        return tag

    def delete(self, tag_id):
        """Administrative delete; associations go with it through the FK cascade."""
        with unit_of_work(self.session):
            tag = self.get(tag_id)
            snapshot = tag.to_dict()
            self.session.delete(tag)
        return snapshot


class TagAssociation:
    """The (owner_id, tag_id) join table of one tag family"""

    def __init__(self, store, relation_model, owner_key):
        self.store = store
        self.relation = relation_model
        self.owner_key = owner_key
        self.owner_column = getattr(relation_model, owner_key)

    @property
    def session(self):
        return self.store.session

    def _rows(self, owner_id, tag_ids):
        return [{self.owner_key: owner_id, "tag_id": tag_id} for tag_id in tag_ids]

    def link(self, owner_id, tag_id):
        """Idempotent: linking an already linked pair is a no-op."""
        insert_ignore(self.session, self.relation.__table__, self._rows(owner_id, [tag_id]))

    def unlink(self, owner_id, tag_id):
        removed = (
            self.session.query(self.relation)
            .filter(self.owner_column == owner_id, self.relation.tag_id == tag_id)
            .delete(synchronize_session=False)
        )
        return removed > 0

    def unlink_all(self, owner_id):
        return (
            self.session.query(self.relation)
            .filter(self.owner_column == owner_id)
            .delete(synchronize_session=False)
        )

    def is_linked(self, owner_id, tag_id):
        query = self.session.query(self.relation).filter(
            self.owner_column == owner_id, self.relation.tag_id == tag_id
        )
        return self.session.query(query.exists()).scalar()

    def tags_for(self, owner_id):
        tag = self.store.model
        return (
            self.session.query(tag)
            .join(self.relation, self.relation.tag_id == tag.id)
            .filter(self.owner_column == owner_id)
            .order_by(tag.name.asc())
            .all()
        )

    def tags_for_many(self, owner_ids):
        """
        Tags of several owners in one query. Every requested owner is present
        in the result, untagged ones with an empty list.
        """
        owner_ids = list(dict.fromkeys(owner_ids))
        if not owner_ids:
            return {}

        tag = self.store.model
        rows = (
            self.session.query(self.owner_column, tag)
            .join(tag, self.relation.tag_id == tag.id)
            .filter(self.owner_column.in_(owner_ids))
            .order_by(tag.name.asc())
            .all()
        )
        grouped = {owner_id: [] for owner_id in owner_ids}
        for owner_id, owner_tag in rows:
            grouped[owner_id].append(owner_tag)
        return grouped

    def owners_of(self, tag_id):
        rows = self.session.query(self.owner_column).filter(self.relation.tag_id == tag_id).all()
        return [row[0] for row in rows]

    def replace(self, owner_id, tag_names):
        """
        Make the owner's tag set exactly the resolved `tag_names`.
        Must run inside the caller's transaction; nothing is committed here.
        """
        tags = [self.store.resolve(name) for name in tag_names]
        self.unlink_all(owner_id)
        tag_ids = list(dict.fromkeys(tag.id for tag in tags))
        insert_ignore(self.session, self.relation.__table__, self._rows(owner_id, tag_ids))
        return tags


class TaggableRepository(CrudRepository):
    """Owner repository whose records carry a tag set"""

    tag_model = None
    relation_model = None
    owner_key = None
    tag_family = None

    def __init__(self, session=None, normalizer=normalize_tag_name):
        super().__init__(session)
        self.tag_store = TagStore(self.tag_model, self.tag_family, self.session, normalizer)
        self.tags = TagAssociation(self.tag_store, self.relation_model, self.owner_key)

    def _attach(self, owner):
        owner.tags = self.tags.tags_for(owner.id)
        return owner

    def _attach_many(self, owners):
        tags_by_owner = self.tags.tags_for_many(owner.id for owner in owners)
        for owner in owners:
            owner.tags = tags_by_owner.get(owner.id, [])
        return owners

    def create_with_tags(self, fields, tag_names=None):
        with unit_of_work(self.session, self._conflict_message(fields)):
            owner = self.model(**fields)
            self.session.add(owner)
            self.session.flush()
            self.tags.replace(owner.id, tag_names or [])
        return self._attach(owner)

    def get_by_id_with_tags(self, id):
        return self._attach(self.get_by_id(id))

    def update_with_tags(self, id, changes, tag_names=None):
        """`tag_names=None` keeps the current tags, a list replaces them."""
        with unit_of_work(self.session, self._conflict_message(changes)):
            owner = self.get_by_id(id)
            self._apply(owner, changes)
            self.session.flush()
            if tag_names is not None:
                self.tags.replace(owner.id, tag_names)
        return self._attach(owner)

    def delete_with_tags(self, id):
        with unit_of_work(self.session):
            owner = self._attach(self.get_by_id(id))
            snapshot = owner.to_dict()
            self.tags.unlink_all(owner.id)
            self.session.delete(owner)
        return snapshot

    def list_all_with_tags(self):
        return self._attach_many(self.get_all())

    def list_all(self):
        return self.get_all()

    # Tag family administration

    def get_all_tags(self):
        return self.tag_store.get_all()

    def create_tag(self, name, **attributes):
        return self.tag_store.create(name, **attributes)

    def delete_tag(self, tag_id):
        return self.tag_store.delete(tag_id)

    def list_by_tag(self, tag_id):
        self.tag_store.get(tag_id)
        owner_ids = self.tags.owners_of(tag_id)
        if not owner_ids:
            return []
        owners = self._query().filter(self.model.id.in_(owner_ids)).order_by(*self._order_by()).all()
        return self._attach_many(owners)

    # Single-tag membership

    def add_tag(self, owner_id, tag_id):
        with unit_of_work(self.session):
            owner = self.get_by_id(owner_id)
            tag = self.tag_store.get(tag_id)
            if self.tags.is_linked(owner.id, tag.id):
                raise ConflictException(f"Tag '{tag.name}' is already linked to this {self.entity_name.lower()}")
            self.tags.link(owner.id, tag.id)
        return self._attach(owner)

    def remove_tag(self, owner_id, tag_id):
        with unit_of_work(self.session):
            owner = self.get_by_id(owner_id)
            if not self.tags.unlink(owner.id, tag_id):
                raise NotFoundException(f"Tag with ID '{tag_id}' is not linked to this {self.entity_name.lower()}")
        return self._attach(owner)

    def get_tags(self, owner_id):
        owner = self.get_by_id(owner_id)
        return self.tags.tags_for(owner.id)
