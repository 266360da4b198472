from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import date, datetime

from app.db.models.patient import Gender

class PatientBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    gender: Gender
    date_of_birth: date
    phone_number: str = Field(min_length=1)
    address: str = Field(min_length=1, max_length=500)

class PatientCreate(PatientBase):
    pass

class PatientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    gender: Optional[Gender] = None
    date_of_birth: Optional[date] = None
    phone_number: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1, max_length=500)

class PatientResponse(PatientBase):
    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
