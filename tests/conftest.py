"""
Shared pytest fixtures for the hospital API tests.

The application runs against an in-memory SQLite database (shared through a
static connection pool) and a fake Redis server.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENCRYPTION_KEY"] = "YWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWFhYWE="
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["CACHE_ENABLED"] = "true"
os.environ["AUTH_ENABLED"] = "true"
os.environ.pop("SMTP_HOST", None)

import smtplib
from datetime import date, time

import fakeredis
import pytest
from fastapi.testclient import TestClient

from hospital_api.config.database import Base, SessionLocal, engine, settings
from hospital_api.config.redis_config import redis_config
from hospital_api.main import app
from hospital_api.models import Appointment, Branch, Doctor, DoctorSchedule, Patient
from hospital_api.utils.security import create_access_token


@pytest.fixture(autouse=True)
def redis_client():
    """Provide a fake Redis client for the cache"""
    client = fakeredis.FakeRedis(decode_responses=True)
    redis_config.set_client(client)
    yield client
    redis_config.set_client(None)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    token = create_access_token("admin@test.com", ["Admin"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def branch(db):
    branch = Branch(name="Cardiology")
    db.add(branch)
    db.commit()
    db.refresh(branch)
    return branch


@pytest.fixture
def doctor(db, branch):
    doctor = Doctor(title="Prof. Dr.", first_name="Ayse", last_name="Yilmaz", branch_id=branch.id)
    db.add(doctor)
    db.commit()
    db.refresh(doctor)
    return doctor


@pytest.fixture
def patient(db):
    patient = Patient(
        first_name="Mehmet",
        last_name="Demir",
        email="mehmet@example.com",
        national_identity="12345678901",
    )
    db.add(patient)
    db.commit()
    db.refresh(patient)
    return patient


@pytest.fixture
def make_schedule(db):
    def factory(doctor_id, day, start=time(9, 0), end=time(17, 0), deleted_date=None):
        schedule = DoctorSchedule(
            doctor_id=doctor_id,
            date=day,
            start_time=start,
            end_time=end,
            deleted_date=deleted_date,
        )
        db.add(schedule)
        db.commit()
        db.refresh(schedule)
        return schedule
    return factory


@pytest.fixture
def make_appointment(db):
    def factory(doctor_id, patient_id, day, at=time(10, 0), deleted_date=None):
        appointment = Appointment(
            date=day,
            time=at,
            status=True,
            doctor_id=doctor_id,
            patient_id=patient_id,
            deleted_date=deleted_date,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment
    return factory


class FakeSMTP:
    """Records messages instead of talking to a mail server"""
    sent = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port

    def starttls(self, context=None):
        pass

    def login(self, username, password):
        pass

    def sendmail(self, from_addr, to_addrs, msg):
        FakeSMTP.sent.append({"from": from_addr, "to": to_addrs, "message": msg})

    def quit(self):
        pass


class UnreachableSMTP(FakeSMTP):
    def __init__(self, host, port, timeout=None):
        raise ConnectionRefusedError(f"Connection refused by {host}:{port}")


@pytest.fixture
def smtp_outbox(monkeypatch):
    FakeSMTP.sent = []
    monkeypatch.setattr(settings, "smtp_host", "smtp.test")
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP.sent


@pytest.fixture
def smtp_down(monkeypatch):
    monkeypatch.setattr(settings, "smtp_host", "smtp.test")
    monkeypatch.setattr(smtplib, "SMTP", UnreachableSMTP)


@pytest.fixture
def workday():
    return date(2024, 2, 1)
