import smtplib
from datetime import date, time

import pytest

from hospital_api.config.database import settings
from hospital_api.models import Doctor, NotificationMessage, NotificationStatus
from hospital_api.schemas.appointment import AppointmentCreate
from hospital_api.services.appointment_service import AppointmentService
from hospital_api.services.notification_service import NotificationService

FEB_1 = date(2024, 2, 1)


@pytest.fixture
def queued(db, doctor, patient, make_schedule):
    make_schedule(doctor.id, FEB_1)
    appointment, message = AppointmentService.create_appointment(
        db, AppointmentCreate(date=FEB_1, time=time(9, 45), doctor_id=doctor.id, patient_id=patient.id)
    )
    return message


def reload(db, message_id):
    db.expire_all()
    return db.get(NotificationMessage, message_id)


def test_deliver_marks_message_sent(db, queued, smtp_outbox):
    assert NotificationService.deliver_message(queued.id) is True

    stored = reload(db, queued.id)
    assert stored.status == NotificationStatus.SENT
    assert stored.attempts == 1
    assert stored.sent_date is not None
    assert len(smtp_outbox) == 1
    assert smtp_outbox[0]["to"] == ["mehmet@example.com"]
    assert "Appointment Confirmation" in smtp_outbox[0]["message"]


def test_failed_delivery_is_recorded_not_raised(db, queued, smtp_down):
    assert NotificationService.deliver_message(queued.id) is False

    stored = reload(db, queued.id)
    assert stored.status == NotificationStatus.FAILED
    assert stored.attempts == 1
    assert "Connection refused" in stored.last_error


def test_message_stays_pending_without_smtp_host(db, queued, monkeypatch):
    monkeypatch.setattr(settings, "smtp_host", None)

    assert NotificationService.deliver_message(queued.id) is False

    stored = reload(db, queued.id)
    assert stored.status == NotificationStatus.PENDING
    assert stored.attempts == 0


def test_sent_message_is_not_resent(db, queued, smtp_outbox):
    NotificationService.deliver_message(queued.id)
    NotificationService.deliver_message(queued.id)

    assert len(smtp_outbox) == 1


def test_unknown_message_is_skipped(db):
    assert NotificationService.deliver_message(12345) is False


def test_dispatch_pending_retries_failed_messages(db, queued, monkeypatch, smtp_outbox):
    stored = reload(db, queued.id)
    stored.status = NotificationStatus.FAILED
    stored.attempts = 1
    db.commit()

    summary = NotificationService.dispatch_pending(db)

    assert summary == {"sent": 1, "failed": 0}
    stored = reload(db, queued.id)
    assert stored.status == NotificationStatus.SENT
    assert stored.attempts == 2


def test_rendered_email_escapes_names(db, branch, patient, make_schedule):
    doctor = Doctor(title="Dr.", first_name="<b>Eve</b>", last_name="O'Neil", branch_id=branch.id)
    db.add(doctor)
    db.commit()
    make_schedule(doctor.id, FEB_1)

    appointment, message = AppointmentService.create_appointment(
        db, AppointmentCreate(date=FEB_1, time=time(9, 5), doctor_id=doctor.id, patient_id=patient.id)
    )

    body = NotificationService.render_appointment_email(appointment)
    assert "&lt;b&gt;Eve&lt;/b&gt;" in body
    assert "<b>Eve</b>" not in body
    assert "01.02.2024" in body
    assert "09:05" in body
    assert "Cardiology" in body
    assert message.body == body


def test_unencodable_message_is_recorded_as_failed(db, queued, smtp_outbox, monkeypatch):
    def refuse(self, from_addr, to_addrs, msg):
        raise UnicodeEncodeError("ascii", "ş", 0, 1, "ordinal not in range(128)")

    monkeypatch.setattr(smtplib.SMTP, "sendmail", refuse)

    assert NotificationService.deliver_message(queued.id) is False

    stored = reload(db, queued.id)
    assert stored.status == NotificationStatus.FAILED
    assert stored.attempts == 1
    assert "ascii" in stored.last_error
