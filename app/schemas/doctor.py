from pydantic import BaseModel
from typing import Optional
from uuid import UUID

class DoctorResponse(BaseModel):
    id: UUID
    name: str
    email: Optional[str] = None

    class Config:
        from_attributes = True
