from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from hospital_api.config.database import get_db
from hospital_api.schemas.report import ReportCreate, ReportUpdate, ReportResponse, ReportDetailResponse
from hospital_api.schemas.common import Page, MessageResponse
from hospital_api.services.report_service import ReportService
from hospital_api.utils.security import require_roles, OperationClaims

router = APIRouter(prefix="/reports", tags=["Reports"])

can_read = Depends(require_roles(OperationClaims.REPORTS_READ, OperationClaims.REPORTS_WRITE))
can_write = Depends(require_roles(OperationClaims.REPORTS_WRITE))

@router.post("/", response_model=ReportResponse, status_code=status.HTTP_201_CREATED, dependencies=[can_write])
def create_report(report: ReportCreate, db: Session = Depends(get_db)):
    """Write a report for an appointment"""
    return ReportService.create_report(db, report)

@router.get("/doctor/{doctor_id}", response_model=Page[ReportDetailResponse], dependencies=[can_read])
def get_doctor_reports(
    doctor_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get reports written for a doctor's appointments"""
    return ReportService.get_reports_by_doctor(db, doctor_id, skip, limit)

@router.get("/{report_id}", response_model=ReportDetailResponse, dependencies=[can_read])
def get_report(report_id: int, db: Session = Depends(get_db)):
    """Get a report with its doctor, patient and appointment details"""
    return ReportService.get_report_detail(db, report_id)

@router.get("/", response_model=Page[ReportResponse], dependencies=[can_read])
def get_all_reports(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    db: Session = Depends(get_db)
):
    return ReportService.get_all_reports(db, skip, limit)

@router.put("/{report_id}", response_model=ReportResponse, dependencies=[can_write])
def update_report(report_id: int, report: ReportUpdate, db: Session = Depends(get_db)):
    return ReportService.update_report(db, report_id, report)

@router.delete("/{report_id}", response_model=MessageResponse, dependencies=[can_write])
def delete_report(report_id: int, db: Session = Depends(get_db)):
    return ReportService.delete_report(db, report_id)
