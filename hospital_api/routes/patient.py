from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from hospital_api.config.database import get_db
from hospital_api.schemas.patient import PatientCreate, PatientUpdate, PatientResponse
from hospital_api.schemas.common import Page, MessageResponse
from hospital_api.services.patient_service import PatientService
from hospital_api.utils.security import require_roles, OperationClaims

router = APIRouter(prefix="/patients", tags=["Patients"])

can_read = Depends(require_roles(OperationClaims.PATIENTS_READ, OperationClaims.PATIENTS_WRITE))
can_write = Depends(require_roles(OperationClaims.PATIENTS_WRITE))

@router.post(
    "/",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "A patient with this identity number already exists"}}
)
def create_patient(patient: PatientCreate, db: Session = Depends(get_db)):
    """Register a patient. The national identity number is stored encrypted."""
    return PatientService.create_patient(db, patient)

@router.get("/{patient_id}", response_model=PatientResponse, dependencies=[can_read])
def get_patient(patient_id: int, db: Session = Depends(get_db)):
    """Get patient by ID"""
    return PatientService.get_patient_by_id(db, patient_id)

@router.get("/", response_model=Page[PatientResponse], dependencies=[can_read])
def get_all_patients(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get all patients with pagination"""
    return PatientService.get_all_patients(db, skip, limit)

@router.put("/{patient_id}", response_model=PatientResponse, dependencies=[can_write])
def update_patient(patient_id: int, patient: PatientUpdate, db: Session = Depends(get_db)):
    """Update patient contact details"""
    return PatientService.update_patient(db, patient_id, patient)

@router.delete("/{patient_id}", response_model=MessageResponse, dependencies=[can_write])
def delete_patient(patient_id: int, db: Session = Depends(get_db)):
    """Delete a patient"""
    return PatientService.delete_patient(db, patient_id)
