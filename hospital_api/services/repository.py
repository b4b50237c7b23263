# hospital_api/services/repository.py - generic soft-delete aware data access

import logging
from typing import Any, Optional, Sequence, Type
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from hospital_api.models.base import RecordState
from hospital_api.utils.errors import StorageConflictError
from hospital_api.utils.messages import STORAGE_CONFLICT

logger = logging.getLogger(__name__)


class Repository:
    """Lookups and writes for one model; every query states which soft-delete states it considers"""

    def __init__(self, model):
        self.model = model

    def query(self, db: Session, *criteria, state: RecordState = RecordState.ACTIVE):
        query = db.query(self.model).filter(*criteria)
        if state == RecordState.ACTIVE:
            query = query.filter(self.model.deleted_date.is_(None))
        elif state == RecordState.DELETED:
            query = query.filter(self.model.deleted_date.is_not(None))
        return query

    def get(self, db: Session, *criteria, state: RecordState = RecordState.ACTIVE, order_by: Sequence = ()):
        query = self.query(db, *criteria, state=state)
        if order_by:
            query = query.order_by(*order_by)
        return query.first()

    def get_list(self, db: Session, *criteria, state: RecordState = RecordState.ACTIVE, skip: int = 0, limit: int = 100):
        query = self.query(db, *criteria, state=state)
        count = query.count()
        items = query.order_by(self.model.id).offset(skip).limit(limit).all()
        return items, count

    def add(self, db: Session, entity):
        db.add(entity)
        flush(db)
        return entity

    def update(self, db: Session, entity, values: Optional[dict] = None):
        for key, value in (values or {}).items():
            setattr(entity, key, value)
        entity.mark_updated()
        return entity


def flush(db: Session):
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Storage constraint rejected flush: {e.orig}")
        raise StorageConflictError(STORAGE_CONFLICT)


def commit(db: Session, *entities):
    """Commit the unit of work and reload the given entities"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Storage constraint rejected commit: {e.orig}")
        raise StorageConflictError(STORAGE_CONFLICT)

    for entity in entities:
        db.refresh(entity)


def to_page(items: list, count: int, skip: int, limit: int, schema: Type[BaseModel]) -> dict[str, Any]:
    """JSON-ready page envelope, safe to cache"""
    return {
        "items": [schema.model_validate(item).model_dump(mode="json") for item in items],
        "count": count,
        "skip": skip,
        "limit": limit,
    }
