from enum import Enum
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, Enum as SAEnum
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from uuid import UUID, uuid4

from app.core.utils import utcnow

if TYPE_CHECKING:
    from .booking import Booking

class UserRole(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    CS = "cs"

class User(SQLModel, table=True):
    __tablename__ = "users"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    role: UserRole = Field(
        sa_column=Column(
            SAEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
            nullable=False,
            index=True,
        )
    )
    name: str
    username: str = Field(unique=True, index=True)
    email: Optional[str] = None
    password_hash: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)

    # Rows are removed by ON DELETE CASCADE, the ORM never touches them
    bookings: List["Booking"] = Relationship(
        back_populates="doctor",
        sa_relationship_kwargs={"passive_deletes": "all"},
    )
