from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, oauth2_scheme
from app.core.redis import RedisClient, get_token_store
from app.db.models import User
from app.db.session import get_session
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.user import UserResponse
from app.services.auth_service import AuthService

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    session: AsyncSession = Depends(get_session),
    token_store: RedisClient = Depends(get_token_store),
):
    service = AuthService(session, token_store)
    return await service.login(login_data)

@router.post("/logout")
async def logout(
    token: str = Depends(oauth2_scheme),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
    token_store: RedisClient = Depends(get_token_store),
):
    service = AuthService(session, token_store)
    return await service.logout(token)

@router.get("/me", response_model=UserResponse)
async def read_me(current_user: User = Depends(get_current_user)):
    return current_user
