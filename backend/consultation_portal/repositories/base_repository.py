# backend/consultation_portal/repositories/base_repository.py
"""
Shared data access for portal repositories.

Repositories flush but never commit: the service owning the unit of work
decides when a change becomes durable. Every SQLAlchemy failure leaves this
layer as a RepositoryException.
"""

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

class BaseRepository(Generic[T]):
    """
    Lookup and write helpers for one mapped model.

    Attributes:
        db: Session owned by the calling service
        model: Mapped class this repository reads and writes
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def get_by_id(self, id: str, load_relationships: bool = True) -> Optional[T]:
        """Row with the given id, or None; related rows are joined in when asked."""
        try:
            query = self.db.query(self.model).filter(self.model.id == id)
            if load_relationships:
                query = self._apply_eager_loading(query)
            return query.first()
        except SQLAlchemyError as e:
            self.logger.error(f"Lookup of {self.model.__name__} {id} failed: {str(e)}")
            raise RepositoryException(f"Failed to load {self.model.__name__}: {str(e)}") from e

    def create(self, **kwargs: Any) -> T:
        """Add a new row and flush so its generated id is available."""
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.flush()
            return entity
        except IntegrityError as e:
            self.logger.error(f"{self.model.__name__} insert violated a constraint: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Integrity constraint violated: {str(e)}") from e
        except SQLAlchemyError as e:
            self.logger.error(f"{self.model.__name__} insert failed: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}") from e

    def flush(self) -> None:
        """Push pending attribute changes to the database."""
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"{self.model.__name__} flush failed: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to save {self.model.__name__}: {str(e)}") from e

    def update(self, id: str, **kwargs: Any) -> Optional[T]:
        """Set the given columns on one row; None when the row is gone."""
        entity = self.get_by_id(id, load_relationships=False)
        if entity is None:
            return None
        for key, value in kwargs.items():
            setattr(entity, key, value)
        self.flush()
        return entity

    def delete(self, id: str) -> bool:
        """Remove one row; False when there was nothing to remove."""
        entity = self.get_by_id(id, load_relationships=False)
        if entity is None:
            return False
        try:
            self.db.delete(entity)
            self.db.flush()
        except SQLAlchemyError as e:
            self.logger.error(f"Deleting {self.model.__name__} {id} failed: {str(e)}")
            self.db.rollback()
            raise RepositoryException(f"Failed to delete {self.model.__name__}: {str(e)}") from e
        return True

    def _apply_eager_loading(self, query: Query) -> Query:
        """Subclasses join in the relationships their callers read."""
        return query
