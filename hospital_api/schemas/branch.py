from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class BranchBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)

class BranchCreate(BranchBase):
    pass

class BranchUpdate(BranchBase):
    pass

class BranchSummary(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True

class BranchResponse(BranchBase):
    id: int
    created_date: datetime
    updated_date: Optional[datetime] = None

    class Config:
        from_attributes = True
