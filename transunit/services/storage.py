"""Storage gateway used by the translation services.

The managers only stage, remove and commit entities through this interface,
so the merge rules do not depend on how the entities are persisted.
"""

from abc import ABC, abstractmethod

from sqlalchemy import inspect

from transunit.models import File, TransUnit, Translation


class Storage(ABC):
    """Abstract create/read/update/delete and commit over the entity kinds."""

    @abstractmethod
    def model_class_for(self, kind: str) -> type:
        """Return the model class registered for an entity kind."""

    @abstractmethod
    def stage(self, entity) -> None:
        """Mark an entity for persistence on the next commit."""

    @abstractmethod
    def remove(self, entity) -> None:
        """Mark an entity for deletion on the next commit."""

    @abstractmethod
    def commit(self) -> None:
        """Write all staged changes in one transaction."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard all staged changes."""

    @abstractmethod
    def find_one_by(self, kind: str, **criteria):
        """Return the first entity of ``kind`` matching ``criteria``, or None."""


class SQLAlchemyStorage(Storage):
    """Storage backed by a SQLAlchemy session (``db.session`` in the app)."""

    MODEL_CLASSES = {
        'trans_unit': TransUnit,
        'translation': Translation,
        'file': File,
    }

    def __init__(self, session):
        self.session = session

    def model_class_for(self, kind: str) -> type:
        try:
            return self.MODEL_CLASSES[kind]
        except KeyError:
            raise ValueError(f'Unknown entity kind: {kind}')

    def stage(self, entity) -> None:
        self.session.add(entity)

    def remove(self, entity) -> None:
        state = inspect(entity)
        if state.transient:
            return
        if state.pending:
            # Never written, nothing to delete
            self.session.expunge(entity)
            return
        self.session.delete(entity)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def find_one_by(self, kind: str, **criteria):
        model = self.model_class_for(kind)
        return self.session.query(model).filter_by(**criteria).first()
