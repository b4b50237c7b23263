from pydantic import BaseModel, Field, EmailStr, field_validator
from datetime import datetime
from typing import Optional
from hospital_api.utils.validators import validate_phone_with_feedback, validate_national_identity


def normalize_phone(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    is_valid, formatted, error = validate_phone_with_feedback(value)
    if not is_valid:
        raise ValueError(error)
    return formatted


class PatientBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, description="International format, e.g. +90-5321234567")

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        return normalize_phone(value)

class PatientCreate(PatientBase):
    national_identity: str = Field(..., description="National identity number, stored encrypted")

    @field_validator("national_identity")
    @classmethod
    def check_identity(cls, value):
        if not validate_national_identity(value):
            raise ValueError("National identity must be 6 to 20 digits")
        return value.strip()

class PatientUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        return normalize_phone(value)

class PatientSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str

    class Config:
        from_attributes = True

class PatientResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    national_identity: str
    created_date: datetime
    updated_date: Optional[datetime] = None

    class Config:
        from_attributes = True
