from datetime import date, datetime, time

import pytest

from hospital_api.models import Appointment, Branch, Doctor, NotificationMessage, NotificationStatus
from hospital_api.schemas.appointment import AppointmentCreate, AppointmentUpdate
from hospital_api.services.appointment_service import AppointmentService
from hospital_api.utils.errors import ConflictError, NotFoundError
from hospital_api.utils.messages import AppointmentMessages, BranchMessages

FEB_1 = date(2024, 2, 1)


def booking(doctor_id, patient_id, day=FEB_1, at=time(10, 30)):
    return AppointmentCreate(date=day, time=at, doctor_id=doctor_id, patient_id=patient_id)


def test_books_appointment_and_queues_confirmation(db, doctor, patient, make_schedule):
    make_schedule(doctor.id, FEB_1)

    appointment, message = AppointmentService.create_appointment(db, booking(doctor.id, patient.id))

    assert appointment.id is not None
    assert appointment.status is True
    assert appointment.doctor.last_name == "Yilmaz"
    assert appointment.patient.first_name == "Mehmet"
    assert message.appointment_id == appointment.id
    assert message.recipient == "mehmet@example.com"
    assert message.status == NotificationStatus.PENDING
    assert message.attempts == 0
    assert "01.02.2024" in message.body
    assert "10:30" in message.body


def test_second_booking_same_day_conflicts_and_writes_nothing(db, doctor, patient, make_schedule, make_appointment):
    make_schedule(doctor.id, FEB_1)
    make_appointment(doctor.id, patient.id, FEB_1)

    with pytest.raises(ConflictError) as exc_info:
        AppointmentService.create_appointment(db, booking(doctor.id, patient.id, at=time(15, 0)))

    assert exc_info.value.detail == AppointmentMessages.ALREADY_BOOKED
    assert db.query(Appointment).count() == 1
    assert db.query(NotificationMessage).count() == 0


def test_same_patient_may_book_another_doctor_same_day(db, branch, doctor, patient, make_schedule, make_appointment):
    other = Doctor(title="Dr.", first_name="Can", last_name="Kaya", branch_id=branch.id)
    db.add(other)
    db.commit()
    make_schedule(doctor.id, FEB_1)
    make_schedule(other.id, FEB_1)
    make_appointment(doctor.id, patient.id, FEB_1)

    appointment, _ = AppointmentService.create_appointment(db, booking(other.id, patient.id))

    assert appointment.doctor_id == other.id


def test_unknown_doctor_is_not_found(db, patient):
    with pytest.raises(NotFoundError):
        AppointmentService.create_appointment(db, booking(404, patient.id))


def test_unknown_patient_is_not_found(db, doctor):
    with pytest.raises(NotFoundError):
        AppointmentService.create_appointment(db, booking(doctor.id, 404))


def test_deleted_branch_is_not_found(db, branch, doctor, patient, make_schedule):
    make_schedule(doctor.id, FEB_1)
    stored = db.get(Branch, branch.id)
    stored.deleted_date = datetime(2024, 1, 1)
    db.commit()

    with pytest.raises(NotFoundError) as exc_info:
        AppointmentService.create_appointment(db, booking(doctor.id, patient.id))

    assert exc_info.value.detail == BranchMessages.NOT_FOUND


def test_booking_outside_working_hours_conflicts(db, doctor, patient, make_schedule):
    make_schedule(doctor.id, FEB_1, start=time(9, 0), end=time(12, 0))

    with pytest.raises(ConflictError) as exc_info:
        AppointmentService.create_appointment(db, booking(doctor.id, patient.id, at=time(12, 0)))

    assert exc_info.value.detail == AppointmentMessages.OUTSIDE_SCHEDULE


def test_booking_on_day_without_schedule_conflicts(db, doctor, patient):
    with pytest.raises(ConflictError) as exc_info:
        AppointmentService.create_appointment(db, booking(doctor.id, patient.id))

    assert exc_info.value.detail == AppointmentMessages.OUTSIDE_SCHEDULE


def test_rebooking_after_cancel_reuses_cancelled_row(db, doctor, patient, make_schedule):
    make_schedule(doctor.id, FEB_1)
    first, _ = AppointmentService.create_appointment(db, booking(doctor.id, patient.id))
    AppointmentService.cancel_appointment(db, first.id)

    again, message = AppointmentService.create_appointment(db, booking(doctor.id, patient.id, at=time(14, 0)))

    assert again.id == first.id
    assert again.deleted_date is None
    assert again.time == time(14, 0)
    assert message.appointment_id == first.id
    assert db.query(Appointment).count() == 1


def test_at_most_one_active_booking_per_patient_doctor_day(db, doctor, patient, make_schedule):
    make_schedule(doctor.id, FEB_1)

    for at in (time(9, 0), time(11, 0), time(13, 0)):
        appointment, _ = AppointmentService.create_appointment(db, booking(doctor.id, patient.id, at=at))
        AppointmentService.cancel_appointment(db, appointment.id)
    AppointmentService.create_appointment(db, booking(doctor.id, patient.id, at=time(15, 0)))
    with pytest.raises(ConflictError):
        AppointmentService.create_appointment(db, booking(doctor.id, patient.id, at=time(16, 0)))

    active = db.query(Appointment).filter(Appointment.deleted_date.is_(None)).count()
    assert active == 1


def test_cancelled_appointment_is_hidden(db, doctor, patient, make_appointment):
    appointment = make_appointment(doctor.id, patient.id, FEB_1)

    AppointmentService.cancel_appointment(db, appointment.id)

    with pytest.raises(NotFoundError):
        AppointmentService.get_appointment_by_id(db, appointment.id)
    page = AppointmentService.get_appointments_by_patient(db, patient.id)
    assert page["count"] == 0


def test_update_time_rechecks_working_hours(db, doctor, patient, make_schedule, make_appointment):
    make_schedule(doctor.id, FEB_1, start=time(9, 0), end=time(12, 0))
    appointment = make_appointment(doctor.id, patient.id, FEB_1)

    with pytest.raises(ConflictError):
        AppointmentService.update_appointment(db, appointment.id, AppointmentUpdate(time=time(18, 0)))

    updated = AppointmentService.update_appointment(db, appointment.id, AppointmentUpdate(time=time(11, 15)))
    assert updated.time == time(11, 15)
    assert updated.updated_date is not None
