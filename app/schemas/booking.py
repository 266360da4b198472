from pydantic import BaseModel, Field, field_validator, model_validator
from uuid import UUID
from datetime import date, datetime, time
from typing import Optional, List

from app.db.models.booking import BookingStatus
from app.schemas.patient import PatientCreate

PLACEHOLDER = "-"

class BookingCreate(BaseModel):
    """Either an existing ``patient_id`` or a new ``patient`` to register with the booking."""

    patient_id: Optional[UUID] = None
    patient: Optional[PatientCreate] = None
    doctor_id: UUID
    appointment_date: date
    appointment_time: time

    @model_validator(mode="after")
    def check_patient_source(self):
        if (self.patient_id is None) == (self.patient is None):
            raise ValueError("Provide exactly one of patient_id or patient")
        return self

class ExaminationFinish(BaseModel):
    diagnosis: str = Field(min_length=1)
    notes: Optional[str] = None

    @field_validator("diagnosis")
    @classmethod
    def diagnosis_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Diagnosis is required")
        return value

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

class BookingResponse(BaseModel):
    id: UUID
    patient_id: UUID
    doctor_id: UUID
    appointment_time: datetime
    status: BookingStatus
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    patient_name: Optional[str] = None
    doctor_name: Optional[str] = None
    diagnosis: Optional[str] = None

class MedicalRecordResponse(BaseModel):
    id: UUID
    appointment_id: UUID
    patient_id: UUID
    doctor_id: UUID
    diagnosis: str
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class ExaminationFinishedResponse(BaseModel):
    message: str
    booking: BookingResponse
    medical_record: MedicalRecordResponse

class MedicalRecordDetail(BaseModel):
    booking_id: UUID
    patient_name: str
    diagnosis: str = PLACEHOLDER
    notes: str = PLACEHOLDER
    has_record: bool = False

class BookingListResponse(BaseModel):
    bookings: List[BookingResponse]
    total: int
