# User-facing business messages, grouped by resource

class BranchMessages:
    NOT_FOUND = "Branch not found"
    NAME_EXISTS = "A branch with this name already exists"
    HAS_DOCTORS = "Branch still has active doctors and cannot be deleted"


class DoctorMessages:
    NOT_FOUND = "Doctor not found"
    HAS_SCHEDULES = "Doctor still has active schedules or appointments and cannot be deleted"


class PatientMessages:
    NOT_FOUND = "Patient not found"
    IDENTITY_EXISTS = "A patient with this identity number already exists"


class ScheduleMessages:
    NOT_FOUND = "No such record exists in the doctor's schedule"
    ALREADY_EXISTS = "A schedule already exists for this doctor on this date"
    BOOKINGS_EXIST = "Bookings already exist for this date; the date cannot be changed"
    INVALID_RANGE = "Schedule end time must be after start time"


class AppointmentMessages:
    NOT_FOUND = "Appointment not found"
    ALREADY_BOOKED = "Patient already has an appointment with this doctor on this date"
    OUTSIDE_SCHEDULE = "Doctor is not working at the requested time"


class ReportMessages:
    NOT_FOUND = "Report not found"


STORAGE_CONFLICT = "The change conflicts with an existing record"
