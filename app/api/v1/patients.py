from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from uuid import UUID

from app.api.deps import require_capability
from app.core.permissions import Capability
from app.db.session import get_session
from app.schemas.patient import PatientCreate, PatientUpdate, PatientResponse
from app.services.patient_service import PatientService

router = APIRouter(dependencies=[Depends(require_capability(Capability.MANAGE_PATIENTS))])

async def get_patient_service(session: AsyncSession = Depends(get_session)) -> PatientService:
    return PatientService(session)

@router.post("/", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    payload: PatientCreate,
    service: PatientService = Depends(get_patient_service)
):
    return await service.create_patient(payload)

@router.get("/", response_model=List[PatientResponse])
async def read_patients(
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    service: PatientService = Depends(get_patient_service)
):
    return await service.get_patients(search, skip, limit)

@router.get("/{patient_id}", response_model=PatientResponse)
async def read_patient(
    patient_id: UUID,
    service: PatientService = Depends(get_patient_service)
):
    return await service.get_patient(patient_id)

@router.patch("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: UUID,
    payload: PatientUpdate,
    service: PatientService = Depends(get_patient_service)
):
    return await service.update_patient(patient_id, payload)

@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    patient_id: UUID,
    service: PatientService = Depends(get_patient_service)
):
    await service.delete_patient(patient_id)
