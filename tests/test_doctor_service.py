from datetime import date, datetime

import pytest

from hospital_api.services.doctor_service import DoctorService
from hospital_api.utils.errors import ConflictError, NotFoundError
from hospital_api.utils.messages import DoctorMessages

FEB_1 = date(2024, 2, 1)


def test_delete_blocked_while_schedules_exist(db, doctor, make_schedule):
    make_schedule(doctor.id, FEB_1)

    with pytest.raises(ConflictError) as exc_info:
        DoctorService.delete_doctor(db, doctor.id)

    assert exc_info.value.detail == DoctorMessages.HAS_SCHEDULES
    assert DoctorService.get_doctor_by_id(db, doctor.id).deleted_date is None


def test_delete_blocked_while_appointments_exist(db, doctor, patient, make_appointment):
    make_appointment(doctor.id, patient.id, FEB_1)

    with pytest.raises(ConflictError):
        DoctorService.delete_doctor(db, doctor.id)


def test_delete_allowed_once_schedules_are_retired(db, doctor, patient, make_schedule, make_appointment):
    make_schedule(doctor.id, FEB_1, deleted_date=datetime(2024, 1, 1))
    make_appointment(doctor.id, patient.id, FEB_1, deleted_date=datetime(2024, 1, 1))

    DoctorService.delete_doctor(db, doctor.id)

    with pytest.raises(NotFoundError):
        DoctorService.get_doctor_by_id(db, doctor.id)
