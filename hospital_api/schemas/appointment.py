from pydantic import BaseModel, field_validator
from datetime import date as date_type, time as time_type, datetime
from typing import Optional
from hospital_api.schemas.doctor import DoctorSummary
from hospital_api.schemas.patient import PatientSummary
from hospital_api.utils.validators import validate_local_time

class AppointmentCreate(BaseModel):
    date: date_type
    time: time_type
    status: bool = True
    doctor_id: int
    patient_id: int

    @field_validator("time")
    @classmethod
    def check_time(cls, value):
        return validate_local_time(value)

class AppointmentUpdate(BaseModel):
    time: Optional[time_type] = None
    status: Optional[bool] = None

    @field_validator("time")
    @classmethod
    def check_time(cls, value):
        return validate_local_time(value)

class AppointmentResponse(BaseModel):
    id: int
    date: date_type
    time: time_type
    status: bool
    doctor_id: int
    patient_id: int
    doctor: DoctorSummary
    patient: PatientSummary
    created_date: datetime
    updated_date: Optional[datetime] = None

    class Config:
        from_attributes = True
