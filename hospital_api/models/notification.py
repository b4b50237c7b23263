from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum
import enum
from hospital_api.config.database import Base
from hospital_api.models.base import utc_now

class NotificationStatus(enum.Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"

class NotificationMessage(Base):
    """Outbox row written in the same transaction as the appointment it announces"""
    __tablename__ = "notification_messages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    recipient = Column(String(100), nullable=False)
    subject = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    status = Column(Enum(NotificationStatus), default=NotificationStatus.PENDING, nullable=False, index=True)
    attempts = Column(Integer, default=0, nullable=False)
    last_error = Column(String(500))
    created_date = Column(DateTime, default=utc_now, nullable=False)
    sent_date = Column(DateTime)

    def __repr__(self):
        return f"<NotificationMessage {self.id} to {self.recipient} ({self.status.value})>"
