"""
Base repository - generic CRUD and transaction handling shared by every entity
"""

from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from portfolio.db import db
from portfolio.exceptions import NotFoundException, PortfolioException, translate_store_error


@contextmanager
def unit_of_work(session, conflict_message="Resource already exists"):
    """
    Commit everything done inside the block, or roll all of it back.
    Store errors are rolled back and re-raised as portfolio exceptions.
    """
    try:
        yield session
        session.commit()
    except PortfolioException:
        session.rollback()
        raise
    except SQLAlchemyError as e:
        session.rollback()
        raise translate_store_error(e, conflict_message) from e


class CrudRepository:
    """Repository for plain entity tables"""

    model = None
    entity_name = "Resource"
    # Column names, "-" prefix for descending
    ordering = ("display_order", "-created_at")
    unique_field = None

    def __init__(self, session=None):
        self.session = session or db.session

    def _order_by(self, ordering=None):
        clauses = []
        for name in ordering or self.ordering:
            column = getattr(self.model, name.lstrip("-"))
            clauses.append(column.desc() if name.startswith("-") else column.asc())
        return clauses

    def _query(self):
        return self.session.query(self.model)

    def _conflict_message(self, fields):
        if self.unique_field and fields.get(self.unique_field) is not None:
            return f"{self.entity_name} with {self.unique_field} '{fields[self.unique_field]}' already exists"
        return f"{self.entity_name} already exists"

    def get_all(self):
        """Get all records in display order"""
        return self._query().order_by(*self._order_by()).all()

    def filter_by(self, **criteria):
        return self._query().filter_by(**criteria).order_by(*self._order_by()).all()

    def find(self, id):
        return self.session.get(self.model, id)

    def get_by_id(self, id):
        """Get record by ID, raising NotFoundException when absent"""
        item = self.find(id)
        if item is None:
            raise NotFoundException(f"{self.entity_name} with ID '{id}' not found")
        return item

    def create(self, **fields):
        """Create new record"""
        with unit_of_work(self.session, self._conflict_message(fields)):
            item = self.model(**fields)
            self.session.add(item)
            self.session.flush()
        return item

    def update(self, id, **changes):
        """Apply the given column changes"""
        with unit_of_work(self.session, self._conflict_message(changes)):
            item = self.get_by_id(id)
            self._apply(item, changes)
            self.session.flush()
        return item

    def delete(self, id):
        """Delete record, returning a dict snapshot of what was removed"""
        with unit_of_work(self.session):
            item = self.get_by_id(id)
            snapshot = item.to_dict()
            self.session.delete(item)
        return snapshot

    def count(self):
        return self._query().count()

    @staticmethod
    def _apply(item, changes):
        for key, value in changes.items():
            if hasattr(item, key):
                setattr(item, key, value)
