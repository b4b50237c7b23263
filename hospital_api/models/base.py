from sqlalchemy import Column, DateTime
from datetime import datetime, timezone
import enum


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RecordState(enum.Enum):
    """Which soft-delete states a lookup should consider"""
    ACTIVE = "active"
    DELETED = "deleted"
    ANY = "any"


class AuditMixin:
    created_date = Column(DateTime, default=utc_now, nullable=False)
    updated_date = Column(DateTime, nullable=True)
    deleted_date = Column(DateTime, nullable=True, index=True)

    @property
    def state(self) -> RecordState:
        return RecordState.DELETED if self.deleted_date is not None else RecordState.ACTIVE

    @property
    def is_deleted(self) -> bool:
        return self.deleted_date is not None

    def mark_deleted(self):
        self.deleted_date = utc_now()

    def mark_updated(self):
        self.updated_date = utc_now()

    def revive(self):
        self.deleted_date = None
        self.updated_date = None
