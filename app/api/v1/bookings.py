from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID

from app.api.deps import require_capability
from app.core.permissions import Capability
from app.core.utils import clinic_today
from app.db.models import Booking, BookingStatus, User, UserRole
from app.db.session import get_session
from app.schemas.booking import (
    BookingCreate,
    BookingListResponse,
    BookingResponse,
    ExaminationFinish,
    ExaminationFinishedResponse,
    MedicalRecordDetail,
    MedicalRecordResponse,
)
from app.services.booking_service import BookingService

router = APIRouter()

async def get_booking_service(session: AsyncSession = Depends(get_session)) -> BookingService:
    return BookingService(session)

def construct_response(booking: Booking) -> BookingResponse:
    record = booking.medical_record
    return BookingResponse(
        id=booking.id,
        patient_id=booking.patient_id,
        doctor_id=booking.doctor_id,
        appointment_time=booking.appointment_time,
        status=booking.status,
        started_at=booking.started_at,
        finished_at=booking.finished_at,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
        patient_name=booking.patient.name if booking.patient else None,
        doctor_name=booking.doctor.name if booking.doctor else None,
        diagnosis=record.diagnosis if record else None,
    )

def construct_list(bookings: list[Booking]) -> BookingListResponse:
    return BookingListResponse(
        bookings=[construct_response(b) for b in bookings],
        total=len(bookings),
    )

def ensure_visible(booking: Booking, user: User):
    if user.role == UserRole.DOCTOR and booking.doctor_id != user.id:
        raise HTTPException(status_code=403, detail="Not authorized")

@router.post("/", response_model=BookingResponse, status_code=201)
async def create_booking(
    request: BookingCreate,
    current_user: User = Depends(require_capability(Capability.CREATE_BOOKING)),
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.create_booking(request)
    return construct_response(booking)

@router.get("/", response_model=BookingListResponse)
async def read_bookings(
    status: Optional[BookingStatus] = None,
    doctor_id: Optional[UUID] = None,
    search: Optional[str] = None,
    current_user: User = Depends(require_capability(Capability.VIEW_ALL_BOOKINGS)),
    service: BookingService = Depends(get_booking_service)
):
    return construct_list(await service.list_bookings(status, doctor_id, search))

@router.get("/queue", response_model=BookingListResponse)
async def read_doctor_queue(
    status: Optional[BookingStatus] = None,
    search: Optional[str] = None,
    current_user: User = Depends(require_capability(Capability.RUN_EXAMINATION)),
    service: BookingService = Depends(get_booking_service)
):
    # Always the authenticated doctor's own bookings for today on the clinic clock
    day = clinic_today(service.tz)
    return construct_list(await service.list_doctor_queue(current_user.id, day, status, search))

@router.get("/{booking_id}", response_model=BookingResponse)
async def read_booking(
    booking_id: UUID,
    current_user: User = Depends(require_capability(Capability.VIEW_MEDICAL_RECORD)),
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.get_booking(booking_id)
    ensure_visible(booking, current_user)
    return construct_response(booking)

@router.post("/{booking_id}/start", response_model=BookingResponse)
async def start_examination(
    booking_id: UUID,
    current_user: User = Depends(require_capability(Capability.RUN_EXAMINATION)),
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.start_examination(booking_id, current_user)
    return construct_response(booking)

@router.post("/{booking_id}/finish", response_model=ExaminationFinishedResponse)
async def finish_examination(
    booking_id: UUID,
    request: ExaminationFinish,
    current_user: User = Depends(require_capability(Capability.RUN_EXAMINATION)),
    service: BookingService = Depends(get_booking_service)
):
    booking, record = await service.finish_examination(booking_id, current_user, request)
    return ExaminationFinishedResponse(
        message="Examination finished",
        booking=construct_response(booking),
        medical_record=MedicalRecordResponse.model_validate(record),
    )

@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: UUID,
    current_user: User = Depends(require_capability(Capability.CANCEL_BOOKING)),
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.cancel_booking(booking_id)
    return construct_response(booking)

@router.get("/{booking_id}/record", response_model=MedicalRecordDetail)
async def read_medical_record(
    booking_id: UUID,
    current_user: User = Depends(require_capability(Capability.VIEW_MEDICAL_RECORD)),
    service: BookingService = Depends(get_booking_service)
):
    booking = await service.get_booking(booking_id)
    ensure_visible(booking, current_user)
    return await service.get_medical_record_detail(booking_id)
