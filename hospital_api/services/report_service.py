import logging
from sqlalchemy.orm import Session
from hospital_api.models.appointment import Appointment
from hospital_api.models.report import Report
from hospital_api.schemas.report import ReportCreate, ReportUpdate, ReportResponse, ReportDetailResponse
from hospital_api.services.appointment_service import AppointmentService
from hospital_api.services.doctor_service import DoctorService
from hospital_api.services.repository import Repository, commit, to_page
from hospital_api.utils.errors import NotFoundError
from hospital_api.utils.messages import ReportMessages

logger = logging.getLogger(__name__)

report_repository = Repository(Report)


class ReportService:
    @staticmethod
    def create_report(db: Session, report_data: ReportCreate) -> Report:
        AppointmentService.get_appointment_by_id(db, report_data.appointment_id)

        report = report_repository.add(db, Report(**report_data.model_dump()))
        commit(db, report)
        logger.info(f"Report {report.id} written for appointment {report.appointment_id}")
        return report

    @staticmethod
    def get_report_by_id(db: Session, report_id: int) -> Report:
        report = report_repository.get(db, Report.id == report_id)
        if not report:
            raise NotFoundError(ReportMessages.NOT_FOUND)
        return report

    @staticmethod
    def get_report_detail(db: Session, report_id: int) -> ReportDetailResponse:
        return ReportDetailResponse.from_report(ReportService.get_report_by_id(db, report_id))

    @staticmethod
    def get_all_reports(db: Session, skip: int = 0, limit: int = 100) -> dict:
        items, count = report_repository.get_list(db, skip=skip, limit=limit)
        return to_page(items, count, skip, limit, ReportResponse)

    @staticmethod
    def get_reports_by_doctor(db: Session, doctor_id: int, skip: int = 0, limit: int = 100) -> dict:
        DoctorService.get_doctor_by_id(db, doctor_id)
        items, count = report_repository.get_list(
            db,
            Report.appointment.has(Appointment.doctor_id == doctor_id),
            skip=skip,
            limit=limit,
        )
        return {
            "items": [ReportDetailResponse.from_report(item).model_dump(mode="json") for item in items],
            "count": count,
            "skip": skip,
            "limit": limit,
        }

    @staticmethod
    def update_report(db: Session, report_id: int, report_data: ReportUpdate) -> Report:
        report = ReportService.get_report_by_id(db, report_id)
        report_repository.update(db, report, report_data.model_dump(exclude_unset=True, exclude_none=True))
        commit(db, report)
        return report

    @staticmethod
    def delete_report(db: Session, report_id: int) -> dict:
        report = ReportService.get_report_by_id(db, report_id)
        report.mark_deleted()
        commit(db)
        logger.info(f"Report {report_id} soft-deleted")
        return {"message": f"Report {report_id} deleted successfully"}
