from hospital_api.models.branch import Branch
from hospital_api.models.doctor import Doctor
from hospital_api.models.patient import Patient
from hospital_api.models.doctor_schedule import DoctorSchedule
from hospital_api.models.appointment import Appointment
from hospital_api.models.report import Report
from hospital_api.models.notification import NotificationMessage, NotificationStatus

__all__ = [
    "Branch",
    "Doctor",
    "Patient",
    "DoctorSchedule",
    "Appointment",
    "Report",
    "NotificationMessage",
    "NotificationStatus",
]
