from sqlmodel import SQLModel
from .user import User, UserRole
from .patient import Patient, Gender
from .booking import Booking, BookingStatus, BOOKING_TRANSITIONS
from .medical_record import MedicalRecord

__all__ = [
    "SQLModel",
    "User",
    "UserRole",
    "Patient",
    "Gender",
    "Booking",
    "BookingStatus",
    "BOOKING_TRANSITIONS",
    "MedicalRecord",
]
