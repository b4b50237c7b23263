from sqlalchemy import Column, Integer, Date, Time, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from hospital_api.config.database import Base
from hospital_api.models.base import AuditMixin

class DoctorSchedule(Base, AuditMixin):
    __tablename__ = "doctor_schedules"
    __table_args__ = (
        # at most one active working-hours row per doctor and day
        Index(
            "uq_doctor_schedules_active_doctor_date",
            "doctor_id",
            "date",
            unique=True,
            sqlite_where=text("deleted_date IS NULL"),
            postgresql_where=text("deleted_date IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)

    doctor = relationship("Doctor", lazy="joined")

    def __repr__(self):
        return f"<DoctorSchedule doctor={self.doctor_id} on {self.date} {self.start_time}-{self.end_time}>"
