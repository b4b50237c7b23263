from sqlalchemy import Column, Integer, String, Index, text
from hospital_api.config.database import Base
from hospital_api.models.base import AuditMixin
from hospital_api.utils.crypto import decrypt_value, encrypt_value, hash_value

class Patient(Base, AuditMixin):
    __tablename__ = "patients"
    __table_args__ = (
        Index(
            "uq_patients_active_identity",
            "national_identity_hash",
            unique=True,
            sqlite_where=text("deleted_date IS NULL"),
            postgresql_where=text("deleted_date IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    phone = Column(String(20))
    national_identity_encrypted = Column(String(255), nullable=False)
    national_identity_hash = Column(String(64), nullable=False, index=True)

    @property
    def national_identity(self) -> str:
        return decrypt_value(self.national_identity_encrypted)

    @national_identity.setter
    def national_identity(self, value: str):
        self.national_identity_encrypted = encrypt_value(value)
        self.national_identity_hash = hash_value(value)

    def __repr__(self):
        return f"<Patient {self.first_name} {self.last_name}>"
