from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, Text
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .booking import Booking

class MedicalRecord(SQLModel, table=True):
    __tablename__ = "medical_records"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    # unique: a booking is finished at most once
    appointment_id: UUID = Field(foreign_key="bookings.id", ondelete="CASCADE", unique=True)
    patient_id: UUID = Field(foreign_key="patients.id", ondelete="CASCADE", index=True)
    doctor_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    diagnosis: str = Field(sa_column=Column(Text, nullable=False))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=utcnow)

    booking: "Booking" = Relationship(back_populates="medical_record")
