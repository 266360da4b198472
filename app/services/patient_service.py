from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, select

from app.core.logger import logger
from app.core.utils import like_pattern
from app.db.models import Patient
from app.schemas.patient import PatientCreate, PatientUpdate

class PatientService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_patient(self, data: PatientCreate) -> Patient:
        patient = Patient(**data.model_dump())
        self.session.add(patient)
        await self.session.commit()
        await self.session.refresh(patient)
        return patient

    async def get_patients(self, search: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[Patient]:
        query = select(Patient)
        if search:
            query = query.where(Patient.name.ilike(like_pattern(search), escape="\\"))
        query = query.order_by(Patient.name).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_patient(self, patient_id: UUID) -> Patient:
        patient = await self.session.get(Patient, patient_id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")
        return patient

    async def update_patient(self, patient_id: UUID, patient_update: PatientUpdate) -> Patient:
        patient = await self.get_patient(patient_id)

        update_data = patient_update.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in update_data.items():
            setattr(patient, key, value)

        self.session.add(patient)
        await self.session.commit()
        await self.session.refresh(patient)
        return patient

    async def delete_patient(self, patient_id: UUID) -> None:
        patient = await self.get_patient(patient_id)

        # Bookings and medical records follow through ON DELETE CASCADE
        stmt = delete(Patient).where(Patient.id == patient.id)
        await self.session.execute(stmt)
        await self.session.commit()
        logger.info(f"Patient {patient_id} deleted with bookings and medical records")
