from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session
from hospital_api.config.database import get_db
from hospital_api.schemas.appointment import AppointmentCreate, AppointmentUpdate, AppointmentResponse
from hospital_api.schemas.common import Page, MessageResponse
from hospital_api.services.appointment_service import AppointmentService
from hospital_api.services.notification_service import NotificationService
from hospital_api.utils.security import require_roles, OperationClaims

router = APIRouter(prefix="/appointments", tags=["Appointments"])

can_write = Depends(require_roles(OperationClaims.APPOINTMENTS_WRITE))

@router.post(
    "/",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Doctor, patient or branch not found"},
        409: {"description": "Patient already booked with this doctor on this date, or doctor not working then"}
    }
)
def create_appointment(
    appointment: AppointmentCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db)
):
    """Book a new appointment; the confirmation email is sent after the booking is saved"""
    created, message = AppointmentService.create_appointment(db, appointment)
    background_tasks.add_task(NotificationService.deliver_message, message.id)
    return created

@router.get("/doctor/{doctor_id}", response_model=Page[AppointmentResponse])
def get_doctor_appointments(
    doctor_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get active appointments for a specific doctor"""
    return AppointmentService.get_appointments_by_doctor(db, doctor_id, skip, limit)

@router.get("/patient/{patient_id}", response_model=Page[AppointmentResponse])
def get_patient_appointments(
    patient_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get active appointments for a specific patient"""
    return AppointmentService.get_appointments_by_patient(db, patient_id, skip, limit)

@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(appointment_id: int, db: Session = Depends(get_db)):
    """Get appointment by ID"""
    return AppointmentService.get_appointment_by_id(db, appointment_id)

@router.get("/", response_model=Page[AppointmentResponse])
def get_all_appointments(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get all appointments with pagination"""
    return AppointmentService.get_all_appointments(db, skip, limit)

@router.put("/{appointment_id}", response_model=AppointmentResponse, dependencies=[can_write])
def update_appointment(
    appointment_id: int,
    appointment: AppointmentUpdate,
    db: Session = Depends(get_db)
):
    """Change the time or status of an appointment"""
    return AppointmentService.update_appointment(db, appointment_id, appointment)

@router.delete("/{appointment_id}", response_model=MessageResponse, dependencies=[can_write])
def cancel_appointment(appointment_id: int, db: Session = Depends(get_db)):
    """Cancel an appointment; a later booking for the same day reuses it"""
    return AppointmentService.cancel_appointment(db, appointment_id)
