from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.api.deps import get_current_user
from app.db.models import User
from app.db.session import get_session
from app.schemas.doctor import DoctorResponse
from app.services.doctor_service import DoctorService

router = APIRouter()

@router.get("/", response_model=List[DoctorResponse])
async def read_doctors(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    service = DoctorService(session)
    return await service.get_doctors()
