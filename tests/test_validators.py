from datetime import time

import pytest
from pydantic import ValidationError

from hospital_api.schemas.appointment import AppointmentCreate, AppointmentUpdate
from hospital_api.schemas.doctor_schedule import DoctorScheduleCreate
from hospital_api.schemas.patient import PatientCreate
from hospital_api.utils.validators import validate_national_identity, validate_phone_with_feedback


@pytest.mark.parametrize("raw, formatted", [
    ("+905321234567", "+90-5321234567"),
    ("+90 (532) 123-45-67", "+90-5321234567"),
    ("+14155550123", "+1-4155550123"),
    ("+9715012345678", "+971-5012345678"),
])
def test_valid_phone_numbers_are_normalized(raw, formatted):
    is_valid, result, error = validate_phone_with_feedback(raw)

    assert is_valid
    assert result == formatted
    assert error == ""


@pytest.mark.parametrize("raw, hint", [
    ("05321234567", "country code"),
    ("+90532123456", "10 digits"),
    ("+904321234567", "must start with"),
    ("+33123", "too short"),
])
def test_invalid_phone_numbers_explain_why(raw, hint):
    is_valid, result, error = validate_phone_with_feedback(raw)

    assert not is_valid
    assert result == raw
    assert hint in error


def test_national_identity_is_digits_only():
    assert validate_national_identity("12345678901")
    assert validate_national_identity(" 123456 ")
    assert not validate_national_identity("12345")
    assert not validate_national_identity("12AB5678901")


def test_patient_schema_rejects_bad_identity():
    with pytest.raises(ValidationError):
        PatientCreate(first_name="A", last_name="B", email="a@example.com", national_identity="abc")


def test_schedule_schema_rejects_inverted_hours():
    with pytest.raises(ValidationError):
        DoctorScheduleCreate(doctor_id=1, date="2024-02-01", start_time="12:00", end_time="12:00")


def test_times_with_utc_offset_are_rejected():
    with pytest.raises(ValidationError):
        AppointmentCreate(date="2024-02-01", time="10:00:00+02:00", doctor_id=1, patient_id=1)
    with pytest.raises(ValidationError):
        DoctorScheduleCreate(doctor_id=1, date="2024-02-01", start_time="09:00+01:00", end_time="17:00")


def test_appointment_update_accepts_time():
    assert AppointmentUpdate(time="11:15").time == time(11, 15)
