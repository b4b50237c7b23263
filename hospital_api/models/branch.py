from sqlalchemy import Column, Integer, String, Index, text
from sqlalchemy.orm import relationship
from hospital_api.config.database import Base
from hospital_api.models.base import AuditMixin

class Branch(Base, AuditMixin):
    __tablename__ = "branches"
    __table_args__ = (
        Index(
            "uq_branches_active_name",
            "name",
            unique=True,
            sqlite_where=text("deleted_date IS NULL"),
            postgresql_where=text("deleted_date IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)

    doctors = relationship("Doctor", back_populates="branch")

    def __repr__(self):
        return f"<Branch {self.name}>"
