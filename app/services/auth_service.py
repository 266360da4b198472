import json
from datetime import timedelta
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.config import settings
from app.core.logger import logger
from app.core.redis import RedisClient
from app.core.security import verify_password, create_access_token
from app.db.models import User
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.user import UserResponse

class AuthService:
    def __init__(self, session: AsyncSession, token_store: RedisClient):
        self.session = session
        self.token_store = token_store

    async def login(self, login_data: LoginRequest) -> LoginResponse:
        # 1. Find User
        stmt = select(User).where(User.username == login_data.username)
        result = await self.session.execute(stmt)
        user = result.scalars().first()

        # 2. Verify Password
        if not user or not verify_password(login_data.password, user.password_hash):
            raise HTTPException(status_code=401, detail="Invalid username or password")

        # 3. Generate Token
        access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        access_token = create_access_token(
            data={"sub": str(user.id), "role": user.role.value},
            expires_delta=access_token_expires,
        )

        # 4. Register Token
        token_data = {
            "user_id": str(user.id),
            "role": user.role.value,
        }
        await self.token_store.set_token(
            access_token,
            json.dumps(token_data),
            settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        )
        logger.info(f"User {user.username} logged in as {user.role.value}")

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            user=UserResponse.model_validate(user),
        )

    async def logout(self, token: str) -> dict:
        await self.token_store.delete_token(token)
        return {"message": "Logged out"}
