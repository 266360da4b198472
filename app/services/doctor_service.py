from typing import List
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.db.models import User, UserRole

class DoctorService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_doctors(self) -> List[User]:
        query = select(User).where(User.role == UserRole.DOCTOR).order_by(User.name)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_doctor(self, doctor_id: UUID) -> User:
        doctor = await self.session.get(User, doctor_id)
        # Users of any other role are not bookable
        if not doctor or doctor.role != UserRole.DOCTOR:
            raise HTTPException(status_code=404, detail="Doctor not found")
        return doctor
