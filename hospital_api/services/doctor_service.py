import logging
from typing import Optional
from sqlalchemy.orm import Session
from hospital_api.models.appointment import Appointment
from hospital_api.models.doctor import Doctor
from hospital_api.models.doctor_schedule import DoctorSchedule
from hospital_api.schemas.doctor import DoctorCreate, DoctorUpdate, DoctorResponse
from hospital_api.services.branch_service import BranchService
from hospital_api.services.repository import Repository, commit, to_page
from hospital_api.services.cache_service import cache_service, DOCTORS_CACHE_GROUP
from hospital_api.utils.errors import NotFoundError, ConflictError
from hospital_api.utils.messages import DoctorMessages

logger = logging.getLogger(__name__)

doctor_repository = Repository(Doctor)
schedule_repository = Repository(DoctorSchedule)
appointment_repository = Repository(Appointment)


class DoctorService:
    @staticmethod
    def create_doctor(db: Session, doctor_data: DoctorCreate) -> Doctor:
        BranchService.get_branch_by_id(db, doctor_data.branch_id)

        doctor = doctor_repository.add(db, Doctor(**doctor_data.model_dump()))
        commit(db, doctor)
        cache_service.invalidate(DOCTORS_CACHE_GROUP)
        logger.info(f"Doctor {doctor.id} created in branch {doctor.branch_id}")
        return doctor

    @staticmethod
    def get_doctor_by_id(db: Session, doctor_id: int) -> Doctor:
        doctor = doctor_repository.get(db, Doctor.id == doctor_id)
        if not doctor:
            raise NotFoundError(DoctorMessages.NOT_FOUND)
        return doctor

    @staticmethod
    def get_all_doctors(db: Session, branch_id: Optional[int] = None, skip: int = 0, limit: int = 100) -> dict:
        params = {"branch_id": branch_id, "skip": skip, "limit": limit}
        cached = cache_service.get(DOCTORS_CACHE_GROUP, params)
        if cached is not None:
            return cached

        criteria = []
        if branch_id is not None:
            criteria.append(Doctor.branch_id == branch_id)

        items, count = doctor_repository.get_list(db, *criteria, skip=skip, limit=limit)
        page = to_page(items, count, skip, limit, DoctorResponse)
        cache_service.set(DOCTORS_CACHE_GROUP, params, page)
        return page

    @staticmethod
    def update_doctor(db: Session, doctor_id: int, doctor_data: DoctorUpdate) -> Doctor:
        doctor = DoctorService.get_doctor_by_id(db, doctor_id)

        update_data = doctor_data.model_dump(exclude_unset=True, exclude_none=True)
        if "branch_id" in update_data:
            BranchService.get_branch_by_id(db, update_data["branch_id"])

        doctor_repository.update(db, doctor, update_data)
        commit(db, doctor)
        cache_service.invalidate(DOCTORS_CACHE_GROUP)
        return doctor

    @staticmethod
    def delete_doctor(db: Session, doctor_id: int) -> dict:
        doctor = DoctorService.get_doctor_by_id(db, doctor_id)
        if schedule_repository.get(db, DoctorSchedule.doctor_id == doctor_id) or \
                appointment_repository.get(db, Appointment.doctor_id == doctor_id):
            raise ConflictError(DoctorMessages.HAS_SCHEDULES)

        doctor.mark_deleted()
        commit(db)
        cache_service.invalidate(DOCTORS_CACHE_GROUP)
        logger.info(f"Doctor {doctor_id} soft-deleted")
        return {"message": f"Doctor {doctor_id} deleted successfully"}
