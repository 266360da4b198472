from enum import Enum
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, Enum as SAEnum
from typing import List, TYPE_CHECKING
from datetime import date, datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .booking import Booking

class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"

class Patient(SQLModel, table=True):
    __tablename__ = "patients"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(index=True)
    gender: Gender = Field(
        sa_column=Column(
            SAEnum(Gender, name="gender", values_callable=lambda e: [m.value for m in e]),
            nullable=False,
        )
    )
    date_of_birth: date
    phone_number: str
    address: str
    created_at: datetime = Field(default_factory=utcnow)

    bookings: List["Booking"] = Relationship(
        back_populates="patient",
        sa_relationship_kwargs={"passive_deletes": "all"},
    )
