from pydantic import BaseModel
from typing import Generic, List, TypeVar

T = TypeVar("T")

class Page(BaseModel, Generic[T]):
    items: List[T]
    count: int
    skip: int
    limit: int

class MessageResponse(BaseModel):
    message: str
