from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from hospital_api.config.database import Base
from hospital_api.models.base import AuditMixin

class Report(Base, AuditMixin):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)

    appointment = relationship("Appointment", lazy="joined")

    def __repr__(self):
        return f"<Report {self.title} for appointment {self.appointment_id}>"
