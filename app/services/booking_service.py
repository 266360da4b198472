from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select
from uuid import UUID
from datetime import date, tzinfo
from fastapi import HTTPException

from app.core.logger import logger
from app.core.utils import utcnow, combine_appointment, day_bounds, clinic_timezone, like_pattern
from app.db.models.booking import Booking, BookingStatus, sources_for
from app.db.models.medical_record import MedicalRecord
from app.db.models.patient import Patient
from app.db.models.user import User
from app.schemas.booking import BookingCreate, ExaminationFinish, MedicalRecordDetail
from app.services.doctor_service import DoctorService

CONFLICT_DETAILS = {
    BookingStatus.FINISHED: "Booking is already finished",
    BookingStatus.CANCELLED: "Booking is cancelled",
    BookingStatus.IN_PROGRESS: "Booking is already in progress",
}

class BookingService:
    """Booking lifecycle: creation, listing and the guarded status transitions."""

    def __init__(self, session: AsyncSession, tz: tzinfo | None = None):
        self.session = session
        # Wall clock for naive appointment times and calendar days
        self.tz = tz or clinic_timezone()

    def _with_relations(self):
        return select(Booking).options(
            selectinload(Booking.patient),
            selectinload(Booking.doctor),
            selectinload(Booking.medical_record),
        ).execution_options(populate_existing=True)

    async def get_booking(self, booking_id: UUID) -> Booking:
        stmt = self._with_relations().where(Booking.id == booking_id)
        result = await self.session.execute(stmt)
        booking = result.scalars().first()
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    async def create_booking(self, data: BookingCreate) -> Booking:
        # 1. Validate Doctor
        doctor = await DoctorService(self.session).get_doctor(data.doctor_id)

        # 2. Resolve or register Patient
        if data.patient is not None:
            patient = Patient(**data.patient.model_dump())
            self.session.add(patient)
            await self.session.flush()
        else:
            patient = await self.session.get(Patient, data.patient_id)
            if not patient:
                raise HTTPException(status_code=404, detail="Patient not found")

        # 3. Create Booking; no double-booking check
        booking = Booking(
            patient_id=patient.id,
            doctor_id=doctor.id,
            appointment_time=combine_appointment(data.appointment_date, data.appointment_time, self.tz),
            status=BookingStatus.WAITING,
        )
        self.session.add(booking)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise HTTPException(status_code=409, detail="Patient or doctor no longer exists")

        logger.info(f"Booking {booking.id} created for doctor {doctor.id} at {booking.appointment_time:%Y-%m-%d %H:%M}")
        return await self.get_booking(booking.id)

    async def list_bookings(
        self,
        status: BookingStatus | None = None,
        doctor_id: UUID | None = None,
        search: str | None = None,
    ) -> list[Booking]:
        """Front-desk list, newest appointment first. ``search`` matches patient or doctor name."""
        stmt = self._with_relations()
        if status:
            stmt = stmt.where(Booking.status == status)
        if doctor_id:
            stmt = stmt.where(Booking.doctor_id == doctor_id)
        if search:
            pattern = like_pattern(search)
            stmt = stmt.join(Patient, Booking.patient_id == Patient.id).join(
                User, Booking.doctor_id == User.id
            ).where(or_(
                Patient.name.ilike(pattern, escape="\\"),
                User.name.ilike(pattern, escape="\\"),
            ))
        stmt = stmt.order_by(Booking.appointment_time.desc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_doctor_queue(
        self,
        doctor_id: UUID,
        day: date,
        status: BookingStatus | None = None,
        search: str | None = None,
    ) -> list[Booking]:
        start_dt, end_dt = day_bounds(day, self.tz)
        stmt = self._with_relations().where(
            Booking.doctor_id == doctor_id,
            Booking.appointment_time >= start_dt,
            Booking.appointment_time < end_dt,
        )
        if status:
            stmt = stmt.where(Booking.status == status)
        if search:
            stmt = stmt.join(Patient, Booking.patient_id == Patient.id).where(
                Patient.name.ilike(like_pattern(search), escape="\\")
            )
        stmt = stmt.order_by(Booking.appointment_time.asc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _transition(self, booking_id: UUID, target: BookingStatus, **values) -> bool:
        """Compare-and-set the status. Returns False when no row was in a source state."""
        stmt = (
            update(Booking)
            .where(Booking.id == booking_id, Booking.status.in_(sources_for(target)))
            .values(status=target, updated_at=utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def _raise_conflict(self, booking_id: UUID):
        await self.session.rollback()
        booking = await self.get_booking(booking_id)
        raise HTTPException(status_code=409, detail=CONFLICT_DETAILS[booking.status])

    def _ensure_own_booking(self, booking: Booking, doctor: User):
        if booking.doctor_id != doctor.id:
            raise HTTPException(status_code=403, detail="Booking belongs to another doctor")

    async def start_examination(self, booking_id: UUID, doctor: User) -> Booking:
        booking = await self.get_booking(booking_id)
        self._ensure_own_booking(booking, doctor)

        if not await self._transition(booking_id, BookingStatus.IN_PROGRESS, started_at=utcnow()):
            await self._raise_conflict(booking_id)
        await self.session.commit()

        logger.info(f"Booking {booking_id} started by doctor {doctor.id}")
        return await self.get_booking(booking_id)

    async def finish_examination(
        self,
        booking_id: UUID,
        doctor: User,
        data: ExaminationFinish,
    ) -> tuple[Booking, MedicalRecord]:
        booking = await self.get_booking(booking_id)
        self._ensure_own_booking(booking, doctor)

        now = utcnow()
        # A booking finished straight from the queue was started at the same instant
        started_at = booking.started_at or now
        if not await self._transition(
            booking_id, BookingStatus.FINISHED, started_at=started_at, finished_at=now
        ):
            await self._raise_conflict(booking_id)

        record = MedicalRecord(
            appointment_id=booking_id,
            patient_id=booking.patient_id,
            doctor_id=doctor.id,
            diagnosis=data.diagnosis,
            notes=data.notes,
        )
        self.session.add(record)
        try:
            await self.session.commit()
        except IntegrityError:
            # Status update and record insert go together or not at all
            await self.session.rollback()
            logger.warning(f"Finishing booking {booking_id} failed, rolled back")
            raise HTTPException(status_code=409, detail="Medical record could not be saved for this booking")

        logger.info(f"Booking {booking_id} finished by doctor {doctor.id}")
        booking = await self.get_booking(booking_id)
        return booking, booking.medical_record

    async def cancel_booking(self, booking_id: UUID) -> Booking:
        await self.get_booking(booking_id)

        if not await self._transition(booking_id, BookingStatus.CANCELLED):
            await self._raise_conflict(booking_id)
        await self.session.commit()

        logger.info(f"Booking {booking_id} cancelled")
        return await self.get_booking(booking_id)

    async def get_medical_record_detail(self, booking_id: UUID) -> MedicalRecordDetail:
        booking = await self.get_booking(booking_id)
        record = booking.medical_record
        if record is None:
            return MedicalRecordDetail(booking_id=booking.id, patient_name=booking.patient.name)

        return MedicalRecordDetail(
            booking_id=booking.id,
            patient_name=booking.patient.name,
            diagnosis=record.diagnosis,
            notes=record.notes or "-",
            has_record=True,
        )
