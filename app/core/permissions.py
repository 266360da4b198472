from enum import Enum

from app.db.models.user import UserRole

class Capability(str, Enum):
    MANAGE_PATIENTS = "manage_patients"
    CREATE_BOOKING = "create_booking"
    VIEW_ALL_BOOKINGS = "view_all_bookings"
    CANCEL_BOOKING = "cancel_booking"
    RUN_EXAMINATION = "run_examination"
    VIEW_MEDICAL_RECORD = "view_medical_record"

_FRONT_DESK = frozenset({
    Capability.MANAGE_PATIENTS,
    Capability.CREATE_BOOKING,
    Capability.VIEW_ALL_BOOKINGS,
    Capability.CANCEL_BOOKING,
    Capability.VIEW_MEDICAL_RECORD,
})

ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.ADMIN: _FRONT_DESK,
    UserRole.CS: _FRONT_DESK,
    UserRole.DOCTOR: frozenset({
        Capability.RUN_EXAMINATION,
        Capability.VIEW_MEDICAL_RECORD,
    }),
}

def has_capability(role: UserRole, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())
