import logging
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from hospital_api.models.appointment import Appointment
from hospital_api.models.base import RecordState
from hospital_api.models.doctor_schedule import DoctorSchedule
from hospital_api.schemas.doctor_schedule import DoctorScheduleCreate, DoctorScheduleUpdate, DoctorScheduleResponse
from hospital_api.services.doctor_service import DoctorService
from hospital_api.services.repository import Repository, commit, to_page
from hospital_api.services.cache_service import cache_service, DOCTOR_SCHEDULES_CACHE_GROUP
from hospital_api.utils.errors import NotFoundError, ConflictError
from hospital_api.utils.messages import ScheduleMessages

logger = logging.getLogger(__name__)

schedule_repository = Repository(DoctorSchedule)
appointment_repository = Repository(Appointment)


class DoctorScheduleService:
    @staticmethod
    def find_slot(db: Session, doctor_id: int, schedule_date: date) -> Optional[DoctorSchedule]:
        """
        Any schedule row, active or soft-deleted, for the doctor and day.
        The active row wins; otherwise the most recently deleted one.
        """
        return schedule_repository.get(
            db,
            DoctorSchedule.doctor_id == doctor_id,
            DoctorSchedule.date == schedule_date,
            state=RecordState.ANY,
            order_by=(DoctorSchedule.deleted_date.is_not(None), DoctorSchedule.deleted_date.desc()),
        )

    @staticmethod
    def ensure_no_bookings(db: Session, doctor_id: int, schedule_date: date):
        booked = appointment_repository.get(
            db,
            Appointment.doctor_id == doctor_id,
            Appointment.date == schedule_date,
        )
        if booked:
            logger.warning(f"Schedule change for doctor {doctor_id} on {schedule_date} blocked by appointment {booked.id}")
            raise ConflictError(ScheduleMessages.BOOKINGS_EXIST)

    @staticmethod
    def create_schedule(db: Session, schedule_data: DoctorScheduleCreate) -> DoctorSchedule:
        DoctorService.get_doctor_by_id(db, schedule_data.doctor_id)

        slot = DoctorScheduleService.find_slot(db, schedule_data.doctor_id, schedule_data.date)
        if slot and not slot.is_deleted:
            raise ConflictError(ScheduleMessages.ALREADY_EXISTS)

        if slot:
            slot.start_time = schedule_data.start_time
            slot.end_time = schedule_data.end_time
            slot.revive()
            schedule = slot
            logger.info(f"Revived schedule {schedule.id} for doctor {schedule.doctor_id} on {schedule.date}")
        else:
            schedule = schedule_repository.add(db, DoctorSchedule(**schedule_data.model_dump()))
            logger.info(f"Schedule {schedule.id} created for doctor {schedule.doctor_id} on {schedule.date}")

        commit(db, schedule)
        cache_service.invalidate(DOCTOR_SCHEDULES_CACHE_GROUP)
        return schedule

    @staticmethod
    def get_schedule_by_id(db: Session, schedule_id: int) -> DoctorSchedule:
        schedule = schedule_repository.get(db, DoctorSchedule.id == schedule_id)
        if not schedule:
            raise NotFoundError(ScheduleMessages.NOT_FOUND)
        return schedule

    @staticmethod
    def get_all_schedules(db: Session, doctor_id: Optional[int] = None, skip: int = 0, limit: int = 100) -> dict:
        params = {"doctor_id": doctor_id, "skip": skip, "limit": limit}
        cached = cache_service.get(DOCTOR_SCHEDULES_CACHE_GROUP, params)
        if cached is not None:
            return cached

        criteria = []
        if doctor_id is not None:
            criteria.append(DoctorSchedule.doctor_id == doctor_id)

        items, count = schedule_repository.get_list(db, *criteria, skip=skip, limit=limit)
        page = to_page(items, count, skip, limit, DoctorScheduleResponse)
        cache_service.set(DOCTOR_SCHEDULES_CACHE_GROUP, params, page)
        return page

    @staticmethod
    def update_schedule(db: Session, schedule_id: int, schedule_data: DoctorScheduleUpdate) -> DoctorSchedule:
        """
        Move or resize a working-hours record.

        Booked appointments on the requested day block the change outright.
        Otherwise an active record of another id on the requested day is a
        conflict, a soft-deleted one is revived in place of the target (which
        is soft-deleted), and anything else updates the target itself.
        """
        existing_schedule = DoctorScheduleService.get_schedule_by_id(db, schedule_id)
        DoctorService.get_doctor_by_id(db, schedule_data.doctor_id)

        conflicting_schedule = DoctorScheduleService.find_slot(db, schedule_data.doctor_id, schedule_data.date)

        DoctorScheduleService.ensure_no_bookings(db, schedule_data.doctor_id, schedule_data.date)

        if conflicting_schedule and conflicting_schedule.id != existing_schedule.id:
            if not conflicting_schedule.is_deleted:
                logger.warning(f"Schedule {schedule_id} collides with active schedule {conflicting_schedule.id}")
                raise ConflictError(ScheduleMessages.ALREADY_EXISTS)

            conflicting_schedule.date = schedule_data.date
            conflicting_schedule.start_time = schedule_data.start_time
            conflicting_schedule.end_time = schedule_data.end_time
            conflicting_schedule.revive()
            existing_schedule.mark_deleted()

            commit(db, conflicting_schedule, existing_schedule)
            cache_service.invalidate(DOCTOR_SCHEDULES_CACHE_GROUP)
            logger.info(f"Schedule {schedule_id} replaced by revived schedule {conflicting_schedule.id}")
            return conflicting_schedule

        schedule_repository.update(db, existing_schedule, schedule_data.model_dump())
        commit(db, existing_schedule)
        cache_service.invalidate(DOCTOR_SCHEDULES_CACHE_GROUP)
        logger.info(f"Schedule {schedule_id} updated to {existing_schedule.date} {existing_schedule.start_time}-{existing_schedule.end_time}")
        return existing_schedule

    @staticmethod
    def delete_schedule(db: Session, schedule_id: int) -> dict:
        schedule = DoctorScheduleService.get_schedule_by_id(db, schedule_id)
        DoctorScheduleService.ensure_no_bookings(db, schedule.doctor_id, schedule.date)

        schedule.mark_deleted()
        commit(db)
        cache_service.invalidate(DOCTOR_SCHEDULES_CACHE_GROUP)
        logger.info(f"Schedule {schedule_id} soft-deleted")
        return {"message": f"Schedule {schedule_id} deleted successfully"}
