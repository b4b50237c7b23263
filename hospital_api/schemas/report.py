from pydantic import BaseModel, Field
from datetime import date, time, datetime
from typing import Optional
from hospital_api.models.report import Report

class ReportCreate(BaseModel):
    appointment_id: int
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)

class ReportUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)

class ReportResponse(BaseModel):
    id: int
    appointment_id: int
    title: str
    content: str
    created_date: datetime
    updated_date: Optional[datetime] = None

    class Config:
        from_attributes = True

class ReportDetailResponse(BaseModel):
    """Report flattened with the doctor, patient and appointment it belongs to"""
    id: int
    title: str
    content: str
    report_date: datetime
    appointment_id: int
    appointment_date: date
    appointment_time: time
    doctor_id: int
    doctor_title: str
    doctor_first_name: str
    doctor_last_name: str
    patient_id: int
    patient_first_name: str
    patient_last_name: str
    patient_identity: str

    @classmethod
    def from_report(cls, report: Report) -> "ReportDetailResponse":
        appointment = report.appointment
        doctor = appointment.doctor
        patient = appointment.patient
        return cls(
            id=report.id,
            title=report.title,
            content=report.content,
            report_date=report.created_date,
            appointment_id=appointment.id,
            appointment_date=appointment.date,
            appointment_time=appointment.time,
            doctor_id=doctor.id,
            doctor_title=doctor.title,
            doctor_first_name=doctor.first_name,
            doctor_last_name=doctor.last_name,
            patient_id=patient.id,
            patient_first_name=patient.first_name,
            patient_last_name=patient.last_name,
            patient_identity=patient.national_identity,
        )
