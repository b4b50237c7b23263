import logging
from datetime import date, time
from typing import Tuple
from sqlalchemy.orm import Session
from hospital_api.models.appointment import Appointment
from hospital_api.models.base import RecordState
from hospital_api.models.doctor_schedule import DoctorSchedule
from hospital_api.models.notification import NotificationMessage
from hospital_api.schemas.appointment import AppointmentCreate, AppointmentUpdate, AppointmentResponse
from hospital_api.services.branch_service import BranchService
from hospital_api.services.doctor_service import DoctorService
from hospital_api.services.patient_service import PatientService
from hospital_api.services.notification_service import NotificationService
from hospital_api.services.repository import Repository, commit, to_page
from hospital_api.utils.errors import NotFoundError, ConflictError
from hospital_api.utils.messages import AppointmentMessages

logger = logging.getLogger(__name__)

appointment_repository = Repository(Appointment)
schedule_repository = Repository(DoctorSchedule)


class AppointmentService:
    @staticmethod
    def validate_schedule_window(db: Session, doctor_id: int, appointment_date: date, appointment_time: time):
        schedule = schedule_repository.get(
            db,
            DoctorSchedule.doctor_id == doctor_id,
            DoctorSchedule.date == appointment_date,
        )
        if not schedule or not (schedule.start_time <= appointment_time < schedule.end_time):
            logger.warning(f"Doctor {doctor_id} has no working hours covering {appointment_date} {appointment_time}")
            raise ConflictError(AppointmentMessages.OUTSIDE_SCHEDULE)
        return schedule

    @staticmethod
    def create_appointment(db: Session, appointment_data: AppointmentCreate) -> Tuple[Appointment, NotificationMessage]:
        """
        Book an appointment, reusing a cancelled booking for the same patient,
        doctor and day when one exists. Returns the appointment and the queued
        confirmation message.
        """
        doctor = DoctorService.get_doctor_by_id(db, appointment_data.doctor_id)
        patient = PatientService.get_patient_by_id(db, appointment_data.patient_id)
        BranchService.get_branch_by_id(db, doctor.branch_id)

        same_day_criteria = (
            Appointment.patient_id == appointment_data.patient_id,
            Appointment.doctor_id == appointment_data.doctor_id,
            Appointment.date == appointment_data.date,
        )

        if appointment_repository.get(db, *same_day_criteria):
            logger.warning(f"Patient {patient.id} already booked with doctor {doctor.id} on {appointment_data.date}")
            raise ConflictError(AppointmentMessages.ALREADY_BOOKED)

        AppointmentService.validate_schedule_window(db, doctor.id, appointment_data.date, appointment_data.time)

        cancelled = appointment_repository.get(
            db,
            *same_day_criteria,
            state=RecordState.DELETED,
            order_by=(Appointment.deleted_date.desc(),),
        )
        if cancelled:
            cancelled.time = appointment_data.time
            cancelled.status = appointment_data.status
            cancelled.revive()
            appointment = cancelled
            logger.info(f"Revived appointment {appointment.id} for patient {patient.id}")
        else:
            appointment = appointment_repository.add(db, Appointment(**appointment_data.model_dump()))
            logger.info(f"Appointment {appointment.id} booked for patient {patient.id} with doctor {doctor.id}")

        appointment.doctor = doctor
        appointment.patient = patient
        message = NotificationService.queue_appointment_confirmation(db, appointment)

        commit(db, appointment, message)
        return appointment, message

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Appointment:
        appointment = appointment_repository.get(db, Appointment.id == appointment_id)
        if not appointment:
            raise NotFoundError(AppointmentMessages.NOT_FOUND)
        return appointment

    @staticmethod
    def get_all_appointments(db: Session, skip: int = 0, limit: int = 100) -> dict:
        items, count = appointment_repository.get_list(db, skip=skip, limit=limit)
        return to_page(items, count, skip, limit, AppointmentResponse)

    @staticmethod
    def get_appointments_by_doctor(db: Session, doctor_id: int, skip: int = 0, limit: int = 100) -> dict:
        DoctorService.get_doctor_by_id(db, doctor_id)
        items, count = appointment_repository.get_list(db, Appointment.doctor_id == doctor_id, skip=skip, limit=limit)
        return to_page(items, count, skip, limit, AppointmentResponse)

    @staticmethod
    def get_appointments_by_patient(db: Session, patient_id: int, skip: int = 0, limit: int = 100) -> dict:
        PatientService.get_patient_by_id(db, patient_id)
        items, count = appointment_repository.get_list(db, Appointment.patient_id == patient_id, skip=skip, limit=limit)
        return to_page(items, count, skip, limit, AppointmentResponse)

    @staticmethod
    def update_appointment(db: Session, appointment_id: int, appointment_data: AppointmentUpdate) -> Appointment:
        appointment = AppointmentService.get_appointment_by_id(db, appointment_id)

        update_data = appointment_data.model_dump(exclude_unset=True, exclude_none=True)
        if "time" in update_data:
            AppointmentService.validate_schedule_window(db, appointment.doctor_id, appointment.date, update_data["time"])

        appointment_repository.update(db, appointment, update_data)
        commit(db, appointment)
        return appointment

    @staticmethod
    def cancel_appointment(db: Session, appointment_id: int) -> dict:
        appointment = AppointmentService.get_appointment_by_id(db, appointment_id)
        appointment.mark_deleted()
        commit(db)
        logger.info(f"Appointment {appointment_id} cancelled")
        return {"message": f"Appointment {appointment_id} cancelled successfully"}
