"""
Base repository.

Services resolve every referenced entity through a repository before any
authorization decision is made, so ownership and enrollment checks work on
already-fetched rows.
"""

from abc import ABC
from typing import TypeVar, Generic, List, Optional, Dict, Any, Type
from sqlalchemy.orm import Query, Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

T = TypeVar('T')


class RepositoryError(Exception):
    """Base exception for repository operations."""
    pass


class DuplicateError(RepositoryError):
    """A write violated a unique key."""

    def __init__(self, entity_type: str, criteria: Dict[str, Any]):
        super().__init__(f"{entity_type} already exists with criteria: {criteria}")
        self.entity_type = entity_type
        self.criteria = criteria


class BaseRepository(ABC, Generic[T]):
    """
    Lookups and committed writes for one mapped class.

    Writes commit immediately and roll back on failure, translating unique
    key violations into DuplicateError.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def get_by_id_optional(self, entity_id: Any) -> Optional[T]:
        if entity_id is None:
            return None
        return self.db.query(self.model).filter(self.model.id == str(entity_id)).first()

    def create(self, entity: T, unique_criteria: Optional[Dict[str, Any]] = None) -> T:
        self.db.add(entity)
        self._commit(unique_criteria or {})
        self.db.refresh(entity)
        return entity

    def update(self, entity: T, updates: Dict[str, Any]) -> T:
        """Apply a partial update to an already fetched entity. Unknown keys are ignored."""
        for key, value in updates.items():
            if hasattr(self.model, key):
                setattr(entity, key, value)

        self._commit(updates)
        self.db.refresh(entity)
        return entity

    def find_by(self, **criteria) -> List[T]:
        return self._filtered(criteria).all()

    def find_one_by(self, **criteria) -> Optional[T]:
        return self._filtered(criteria).first()

    def count(self, **criteria) -> int:
        return self._filtered(criteria).count()

    def _filtered(self, criteria: Dict[str, Any]) -> Query:
        query = self.db.query(self.model)
        for key, value in criteria.items():
            query = query.filter(getattr(self.model, key) == value)
        return query

    def _commit(self, criteria: Dict[str, Any]):
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateError(self.model.__name__, criteria)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Failed to write {self.model.__name__}: {e}")
