from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from hospital_api.config.database import Base
from hospital_api.models.base import AuditMixin

class Doctor(Base, AuditMixin):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(50), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=False, index=True)

    branch = relationship("Branch", back_populates="doctors", lazy="joined")

    def __repr__(self):
        return f"<Doctor {self.title} {self.first_name} {self.last_name}>"
