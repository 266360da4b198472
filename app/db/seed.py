"""Create the tables and the default clinic accounts.

Run with ``python -m app.db.seed``. Existing usernames are left untouched.
"""
import asyncio

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.config import settings
from app.core.logger import logger
from app.core.security import get_password_hash
from app.core.utils import generate_password
from app.db.models import User, UserRole
from app.db.session import async_session, engine, init_db

DEFAULT_USERS = [
    {"name": "Admin", "username": "admin", "email": "admin@clinic.local", "role": UserRole.ADMIN},
    {"name": "Doctor", "username": "doctor", "email": "doctor@clinic.local", "role": UserRole.DOCTOR},
    {"name": "Customer Service", "username": "cs", "email": "cs@clinic.local", "role": UserRole.CS},
]

async def seed_users(session: AsyncSession, password: str | None = None) -> dict[str, str]:
    """Insert missing default users. Returns the credentials of the ones created."""
    created = {}
    for data in DEFAULT_USERS:
        stmt = select(User).where(User.username == data["username"])
        result = await session.execute(stmt)
        if result.scalars().first():
            continue

        user_password = password or generate_password()
        session.add(User(**data, password_hash=get_password_hash(user_password)))
        created[data["username"]] = user_password

    await session.commit()
    return created

async def main():
    await init_db(engine)
    async with async_session() as session:
        created = await seed_users(session, settings.SEED_PASSWORD)

    for username, password in created.items():
        logger.info(f"Created user {username} with password {password}")
    if not created:
        logger.info("Default users already present")
    await engine.dispose()

if __name__ == "__main__":
    asyncio.run(main())
