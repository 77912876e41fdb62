from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class School(BaseModel):
    id: int
    name: str
    active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Screener(BaseModel):
    id: int
    name: str
    active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
