from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from hospital_api.config.database import get_db
from hospital_api.schemas.doctor_schedule import DoctorScheduleCreate, DoctorScheduleUpdate, DoctorScheduleResponse
from hospital_api.schemas.common import Page, MessageResponse
from hospital_api.services.doctor_schedule_service import DoctorScheduleService
from hospital_api.utils.security import require_roles, OperationClaims

router = APIRouter(prefix="/doctor-schedules", tags=["Doctor Schedules"])

can_write = Depends(require_roles(OperationClaims.DOCTOR_SCHEDULES_WRITE))

@router.post(
    "/",
    response_model=DoctorScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_write],
    responses={
        404: {"description": "Doctor not found"},
        409: {"description": "A schedule already exists for this doctor on this date"}
    }
)
def create_schedule(schedule: DoctorScheduleCreate, db: Session = Depends(get_db)):
    """Assign working hours to a doctor for one day"""
    return DoctorScheduleService.create_schedule(db, schedule)

@router.get("/{schedule_id}", response_model=DoctorScheduleResponse)
def get_schedule(schedule_id: int, db: Session = Depends(get_db)):
    """Get schedule record by ID"""
    return DoctorScheduleService.get_schedule_by_id(db, schedule_id)

@router.get("/", response_model=Page[DoctorScheduleResponse])
def get_all_schedules(
    doctor_id: Optional[int] = Query(None, description="Only schedules of this doctor"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get active schedule records with pagination"""
    return DoctorScheduleService.get_all_schedules(db, doctor_id, skip, limit)

@router.put(
    "/{schedule_id}",
    response_model=DoctorScheduleResponse,
    dependencies=[Depends(require_roles(
        OperationClaims.DOCTOR_SCHEDULES_WRITE,
        OperationClaims.DOCTOR_SCHEDULES_UPDATE,
        OperationClaims.DOCTORS_UPDATE,
    ))],
    responses={
        404: {"description": "Schedule record or doctor not found"},
        409: {"description": "Bookings exist on the requested date, or another schedule occupies it"}
    }
)
def update_schedule(schedule_id: int, schedule: DoctorScheduleUpdate, db: Session = Depends(get_db)):
    """
    Move or resize a schedule record.

    The response is the record that now holds the requested day, which may be
    a previously deleted record brought back instead of the one addressed.
    """
    return DoctorScheduleService.update_schedule(db, schedule_id, schedule)

@router.delete("/{schedule_id}", response_model=MessageResponse, dependencies=[can_write])
def delete_schedule(schedule_id: int, db: Session = Depends(get_db)):
    """Delete a schedule record that has no bookings on its day"""
    return DoctorScheduleService.delete_schedule(db, schedule_id)
