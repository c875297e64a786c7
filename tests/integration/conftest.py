from datetime import timedelta
from typing import Optional
from uuid import UUID

import bcrypt
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tests.fixtures.json_loader import TestDataLoader
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.use_cases.auth.tokens import generate_session_token
from src.depends import get_unit_of_work
from src.domain.base import utcnow
from src.domain.entities import Doctor, Pharmacist, User, UserSession


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def users(session_factory, test_data):
    """
    Seed one account per fixture user and the doctor/pharmacist profiles.

    Returns plain dicts (id, email, password, role) keyed by fixture name so
    tests never touch ORM instances owned by another session.
    """
    seeded = {}
    async with session_factory() as session:
        for name, data in test_data.users().items():
            password = data.pop("password", None)
            user = User(
                **data,
                password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode()
                if password
                else None,
            )
            session.add(user)
            seeded[name] = {
                "id": user.id,
                "email": user.email,
                "password": password,
                "role": data["role"],
            }

        session.add(Doctor(user_id=seeded["doctor"]["id"], **test_data.profile("doctor")))
        session.add(
            Pharmacist(user_id=seeded["pharmacist"]["id"], **test_data.profile("pharmacist"))
        )
        await session.commit()

    return seeded


@pytest_asyncio.fixture
def create_session(session_factory):
    """Insert a session row directly and return its token"""

    async def _create(
        user_id: UUID,
        expires_in: timedelta = timedelta(hours=1),
        is_active: bool = True,
        token: Optional[str] = None,
    ) -> str:
        token = token or generate_session_token()
        async with session_factory() as session:
            session.add(
                UserSession(
                    user_id=user_id,
                    session_token=token,
                    is_active=is_active,
                    expires_at=utcnow() + expires_in,
                )
            )
            await session.commit()
        return token

    return _create


@pytest_asyncio.fixture
async def client(db_session, monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
