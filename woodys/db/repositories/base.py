"""
Shared plumbing for the SQLAlchemy repositories.

Translates store failures into the service error taxonomy and provides the
commit/validate/paginate helpers every repository uses.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import delete as sa_delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session
from sqlalchemy.orm.exc import StaleDataError

from woodys.errors import ConflictError, InternalError, NotFoundError, ValidationError, WoodysError
from woodys.utils.validation import normalize_pagination

logger = logging.getLogger(__name__)

_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


def translate_store_error(exc: SQLAlchemyError, entity: str) -> WoodysError:
    """Map a SQLAlchemy failure onto the error taxonomy."""
    if isinstance(exc, StaleDataError):
        return NotFoundError.for_entity(entity)
    if isinstance(exc, IntegrityError):
        orig = exc.orig
        code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
        text = str(orig).lower()
        if code == _UNIQUE_VIOLATION or "unique" in text or "duplicate key" in text:
            return ConflictError(f"{entity} already exists")
        if code == _FOREIGN_KEY_VIOLATION or "foreign key" in text:
            return NotFoundError(f"{entity} references a record that does not exist")
    logger.error("store_error entity=%s error=%s", entity, exc)
    return InternalError(f"{entity} store operation failed")


def paginate(query: Query, limit: Optional[int], offset: Optional[int]) -> list:
    limit, offset = normalize_pagination(limit, offset)
    return query.offset(offset).limit(limit).all()


class SqlAlchemyRepository:
    """Base class holding the session handle and write helpers."""

    model: Any = None
    entity_name = "record"

    def __init__(self, db: Session):
        self.db = db

    def _get_or_raise(self, entity_id: int):
        obj = self.db.get(self.model, entity_id)
        if obj is None:
            raise NotFoundError.for_entity(self.entity_name, entity_id)
        return obj

    def _commit(self, refresh=None) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_store_error(exc, self.entity_name) from exc
        if refresh is not None:
            self.db.refresh(refresh)

    def _insert(self, entity):
        entity.validate()
        self.db.add(entity)
        self._commit(refresh=entity)
        return entity

    def _save(self, entity):
        """Validate and persist pending changes on an attached entity."""
        try:
            entity.validate()
        except ValidationError:
            # Drop the rejected in-memory changes so later commits cannot flush them
            self.db.rollback()
            raise
        self._commit(refresh=entity)
        return entity

    def _delete_by_id(self, entity_id: int) -> None:
        try:
            result = self.db.execute(sa_delete(self.model).where(self.model.id == entity_id))
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_store_error(exc, self.entity_name) from exc
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFoundError.for_entity(self.entity_name, entity_id)
        self._commit()
