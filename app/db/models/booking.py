from enum import Enum
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, Enum as SAEnum
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .patient import Patient
    from .user import User
    from .medical_record import MedicalRecord

class BookingStatus(str, Enum):
    WAITING = "Waiting"
    IN_PROGRESS = "InProgress"
    FINISHED = "Finished"
    CANCELLED = "Cancelled"

BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.WAITING: frozenset({BookingStatus.IN_PROGRESS, BookingStatus.FINISHED, BookingStatus.CANCELLED}),
    BookingStatus.IN_PROGRESS: frozenset({BookingStatus.FINISHED, BookingStatus.CANCELLED}),
    BookingStatus.FINISHED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

def sources_for(target: BookingStatus) -> list[BookingStatus]:
    """States from which ``target`` may be entered."""
    return [state for state, targets in BOOKING_TRANSITIONS.items() if target in targets]

class Booking(SQLModel, table=True):
    __tablename__ = "bookings"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    patient_id: UUID = Field(foreign_key="patients.id", ondelete="CASCADE", index=True)
    doctor_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    appointment_time: datetime = Field(index=True)
    status: BookingStatus = Field(
        default=BookingStatus.WAITING,
        sa_column=Column(
            SAEnum(BookingStatus, name="booking_status", values_callable=lambda e: [m.value for m in e]),
            nullable=False,
            default=BookingStatus.WAITING,
        ),
    )
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    patient: "Patient" = Relationship(back_populates="bookings")
    doctor: "User" = Relationship(back_populates="bookings")
    medical_record: Optional["MedicalRecord"] = Relationship(
        back_populates="booking",
        sa_relationship_kwargs={"uselist": False, "passive_deletes": "all"},
    )
