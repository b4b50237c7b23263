from sqlalchemy import Column, Integer, Boolean, Date, Time, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from hospital_api.config.database import Base
from hospital_api.models.base import AuditMixin

class Appointment(Base, AuditMixin):
    __tablename__ = "appointments"
    __table_args__ = (
        Index(
            "uq_appointments_active_patient_doctor_date",
            "patient_id",
            "doctor_id",
            "date",
            unique=True,
            sqlite_where=text("deleted_date IS NULL"),
            postgresql_where=text("deleted_date IS NULL"),
        ),
        Index("ix_appointments_doctor_date", "doctor_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    status = Column(Boolean, nullable=False, default=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)

    doctor = relationship("Doctor", lazy="joined")
    patient = relationship("Patient", lazy="joined")

    def __repr__(self):
        return f"<Appointment patient={self.patient_id} with doctor={self.doctor_id} on {self.date} {self.time}>"
