from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from hospital_api.config.database import get_db
from hospital_api.schemas.doctor import DoctorCreate, DoctorUpdate, DoctorResponse
from hospital_api.schemas.common import Page, MessageResponse
from hospital_api.services.doctor_service import DoctorService
from hospital_api.utils.security import require_roles, OperationClaims

router = APIRouter(prefix="/doctors", tags=["Doctors"])

can_write = Depends(require_roles(OperationClaims.DOCTORS_WRITE))

@router.post(
    "/",
    response_model=DoctorResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_write],
    summary="Create a new doctor",
    description="Register a new doctor in an existing branch",
    responses={
        201: {
            "description": "Doctor created successfully",
            "content": {
                "application/json": {
                    "example": {
                        "id": 1,
                        "title": "Prof. Dr.",
                        "first_name": "Ayse",
                        "last_name": "Yilmaz",
                        "branch_id": 2,
                        "branch": {"id": 2, "name": "Cardiology"},
                        "created_date": "2025-01-10T09:00:00",
                        "updated_date": None
                    }
                }
            }
        },
        404: {"description": "Branch not found"}
    }
)
def create_doctor(doctor: DoctorCreate, db: Session = Depends(get_db)):
    """
    Create a new doctor with the following information:

    - **title**: Academic title, e.g. "Prof. Dr."
    - **first_name** / **last_name**: Doctor's name
    - **branch_id**: Branch the doctor works in
    """
    return DoctorService.create_doctor(db, doctor)

@router.get(
    "/{doctor_id}",
    response_model=DoctorResponse,
    summary="Get doctor by ID",
    responses={404: {"description": "Doctor not found"}}
)
def get_doctor(doctor_id: int, db: Session = Depends(get_db)):
    return DoctorService.get_doctor_by_id(db, doctor_id)

@router.get(
    "/",
    response_model=Page[DoctorResponse],
    summary="Get all doctors",
    description="Retrieve a paginated list of doctors, optionally filtered by branch"
)
def get_all_doctors(
    branch_id: Optional[int] = Query(None, description="Only doctors of this branch"),
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=100, description="Maximum number of records to return"),
    db: Session = Depends(get_db)
):
    return DoctorService.get_all_doctors(db, branch_id, skip, limit)

@router.put(
    "/{doctor_id}",
    response_model=DoctorResponse,
    dependencies=[can_write],
    summary="Update doctor details",
    description="Update existing doctor information (partial updates allowed)",
    responses={404: {"description": "Doctor or branch not found"}}
)
def update_doctor(doctor_id: int, doctor: DoctorUpdate, db: Session = Depends(get_db)):
    """Update doctor details. Only provided fields will be updated."""
    return DoctorService.update_doctor(db, doctor_id, doctor)

@router.delete(
    "/{doctor_id}",
    response_model=MessageResponse,
    dependencies=[can_write],
    summary="Delete a doctor",
    responses={
        404: {"description": "Doctor not found"},
        409: {"description": "Doctor still has active schedules or appointments"}
    }
)
def delete_doctor(doctor_id: int, db: Session = Depends(get_db)):
    return DoctorService.delete_doctor(db, doctor_id)
