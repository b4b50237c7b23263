from pydantic import BaseModel, field_validator, model_validator
from datetime import date as date_type, time as time_type, datetime
from typing import Optional
from hospital_api.utils.messages import ScheduleMessages
from hospital_api.utils.validators import validate_local_time

class DoctorScheduleBase(BaseModel):
    doctor_id: int
    date: date_type
    start_time: time_type
    end_time: time_type

    @field_validator("start_time", "end_time")
    @classmethod
    def check_local_time(cls, value):
        return validate_local_time(value)

    @model_validator(mode="after")
    def check_time_range(self):
        if self.end_time <= self.start_time:
            raise ValueError(ScheduleMessages.INVALID_RANGE)
        return self

class DoctorScheduleCreate(DoctorScheduleBase):
    pass

class DoctorScheduleUpdate(DoctorScheduleBase):
    pass

class DoctorScheduleResponse(BaseModel):
    id: int
    doctor_id: int
    date: date_type
    start_time: time_type
    end_time: time_type
    created_date: datetime
    updated_date: Optional[datetime] = None
    deleted_date: Optional[datetime] = None

    class Config:
        from_attributes = True
