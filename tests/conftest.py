import json
from datetime import date, datetime, time, timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.core.redis import get_token_store
from app.core.security import create_access_token, get_password_hash
from app.core.utils import clinic_timezone, clinic_today
from app.db.models import Booking, BookingStatus, Gender, Patient, User, UserRole
from app.db.session import create_engine_from_url, create_session_factory, get_session, init_db
from app.main import app

PASSWORD = "secret-password"
PASSWORD_HASH = get_password_hash(PASSWORD)


class InMemoryTokenStore:
    def __init__(self):
        self.tokens = {}

    async def set_token(self, token: str, value: str, expire: int):
        self.tokens[token] = value

    async def get_token(self, token: str) -> str | None:
        return self.tokens.get(token)

    async def delete_token(self, token: str):
        self.tokens.pop(token, None)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_engine_from_url(f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def token_store():
    return InMemoryTokenStore()


@pytest_asyncio.fixture
async def client(session_factory, token_store):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_token_store] = lambda: token_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def make_user(session, role: UserRole, username: str, name: str) -> User:
    user = User(role=role, name=name, username=username, password_hash=PASSWORD_HASH)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin(session):
    return await make_user(session, UserRole.ADMIN, "admin", "Admin")


@pytest_asyncio.fixture
async def cs_user(session):
    return await make_user(session, UserRole.CS, "cs", "Customer Service")


@pytest_asyncio.fixture
async def doctor(session):
    return await make_user(session, UserRole.DOCTOR, "amin", "Dr. Amin")


@pytest_asyncio.fixture
async def other_doctor(session):
    return await make_user(session, UserRole.DOCTOR, "budi", "Dr. Budi")


@pytest_asyncio.fixture
async def patient(session):
    patient = Patient(
        name="Siti",
        gender=Gender.FEMALE,
        date_of_birth=date(1990, 1, 1),
        phone_number="081234567890",
        address="Jl. Merdeka 1",
    )
    session.add(patient)
    await session.commit()
    await session.refresh(patient)
    return patient


@pytest.fixture
def auth_headers(token_store):
    """Issue a registered bearer token for a user, as a successful login would."""

    def _headers(user: User) -> dict:
        token = create_access_token({"sub": str(user.id), "role": user.role.value})
        token_store.tokens[token] = json.dumps({"user_id": str(user.id), "role": user.role.value})
        return {"Authorization": f"Bearer {token}"}

    return _headers


async def add_booking(session, patient: Patient, doctor: User, when: datetime,
                      status: BookingStatus = BookingStatus.WAITING) -> Booking:
    booking = Booking(patient_id=patient.id, doctor_id=doctor.id, appointment_time=when, status=status)
    session.add(booking)
    await session.commit()
    await session.refresh(booking)
    return booking


def clinic_date(days: int = 0) -> date:
    return clinic_today(clinic_timezone()) + timedelta(days=days)


def today_at(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(clinic_date(), time(hour, minute), tzinfo=clinic_timezone())


def tomorrow_at(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(clinic_date(1), time(hour, minute), tzinfo=clinic_timezone())
