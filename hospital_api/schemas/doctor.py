from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from hospital_api.schemas.branch import BranchSummary

class DoctorBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=50, examples=["Prof. Dr."])
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    branch_id: int

class DoctorCreate(DoctorBase):
    pass

class DoctorUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=50)
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    branch_id: Optional[int] = None

class DoctorSummary(BaseModel):
    id: int
    title: str
    first_name: str
    last_name: str
    branch: BranchSummary

    class Config:
        from_attributes = True

class DoctorResponse(DoctorBase):
    id: int
    branch: BranchSummary
    created_date: datetime
    updated_date: Optional[datetime] = None

    class Config:
        from_attributes = True
