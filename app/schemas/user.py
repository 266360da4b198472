from pydantic import BaseModel
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.db.models.user import UserRole

class UserBase(BaseModel):
    name: str
    email: Optional[str] = None

class UserResponse(UserBase):
    id: UUID
    role: UserRole
    username: str
    created_at: datetime

    class Config:
        from_attributes = True
