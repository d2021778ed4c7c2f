"""
Record store abstraction used by the service layer.

Services never touch a session directly; they receive a ``RecordStore`` so that
tests can hand them an in-memory implementation instead.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StorePersistenceError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class RecordStore(ABC):
    """Typed row storage with integer identity."""

    @abstractmethod
    def get(self, model: Type[ModelT], record_id: int) -> Optional[ModelT]:
        ...

    @abstractmethod
    def find_first(self, model: Type[ModelT], **criteria: Any) -> Optional[ModelT]:
        ...

    @abstractmethod
    def find_all(self, model: Type[ModelT], **criteria: Any) -> List[ModelT]:
        ...

    @abstractmethod
    def insert(self, model: Type[ModelT], **values: Any) -> ModelT:
        ...

    @abstractmethod
    def update(self, model: Type[ModelT], record_id: int, **values: Any) -> int:
        """Apply ``values`` to the row with ``record_id``; return rows matched."""


class SqlAlchemyRecordStore(RecordStore):
    def __init__(self, db: Session):
        self.db = db

    def get(self, model, record_id):
        try:
            return self.db.get(model, record_id)
        except SQLAlchemyError as exc:
            raise self._failed(f"read {model.__tablename__}", exc) from exc

    def find_first(self, model, **criteria):
        try:
            return self.db.query(model).filter_by(**criteria).order_by(model.id).first()
        except SQLAlchemyError as exc:
            raise self._failed(f"query {model.__tablename__}", exc) from exc

    def find_all(self, model, **criteria):
        try:
            return self.db.query(model).filter_by(**criteria).order_by(model.id).all()
        except SQLAlchemyError as exc:
            raise self._failed(f"query {model.__tablename__}", exc) from exc

    def insert(self, model, **values):
        row = model(**values)
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise self._failed(f"insert into {model.__tablename__}", exc) from exc
        return row

    def update(self, model, record_id, **values):
        try:
            matched = (
                self.db.query(model)
                .filter(model.id == record_id)
                .update(values, synchronize_session="fetch")
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise self._failed(f"update {model.__tablename__}", exc) from exc
        return matched

    @staticmethod
    def _failed(action: str, exc: SQLAlchemyError) -> StorePersistenceError:
        logger.error(f"Record store failed to {action}: {str(exc)}")
        return StorePersistenceError(f"Could not {action}")
