import os
from datetime import date

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")
os.environ["CLINIC_TIMEZONE"] = "America/Mexico_City"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from clinic_api.auth import create_access_token
from clinic_api.database import Base, get_db
from clinic_api.main import app
from clinic_api.models import Client, Service, Supply, User


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def http(session_factory):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def add_records(session_factory, *records):
    async with session_factory() as db:
        db.add_all(records)
        await db.commit()
    return records


async def count_rows(session_factory, model, *criteria) -> int:
    async with session_factory() as db:
        result = await db.execute(select(func.count()).select_from(model).where(*criteria))
        return result.scalar_one()


async def fetch_one(session_factory, model, *criteria):
    async with session_factory() as db:
        result = await db.execute(select(model).where(*criteria))
        return result.scalar_one_or_none()


@pytest.fixture
async def admin_user(session_factory):
    (user,) = await add_records(
        session_factory, User(name="Admin", email="admin@clinic.test", role="admin")
    )
    return user


@pytest.fixture
async def regular_user(session_factory):
    (user,) = await add_records(
        session_factory, User(name="Reception", email="front@clinic.test", role="user")
    )
    return user


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_access_token(admin_user)}"}


@pytest.fixture
def user_headers(regular_user):
    return {"Authorization": f"Bearer {create_access_token(regular_user)}"}


@pytest.fixture
async def clinic_client(session_factory):
    (client,) = await add_records(
        session_factory,
        Client(
            first_name="Ana",
            middle_name="Maria",
            last_name="Lopez",
            emergency_number="555-123-4567",
            birth_date=date(1990, 5, 20),
        ),
    )
    return client


@pytest.fixture
async def cleaning(session_factory):
    (service,) = await add_records(session_factory, Service(name="Dental cleaning", price=500.0))
    return service


@pytest.fixture
async def whitening(session_factory):
    (service,) = await add_records(session_factory, Service(name="Whitening", price=1200.0))
    return service


@pytest.fixture
async def gloves(session_factory):
    (supply,) = await add_records(
        session_factory,
        Supply(name="Gloves", quantity=100, expiration_date=date(2030, 1, 1), price=2.5),
    )
    return supply


@pytest.fixture
async def appointment(http, admin_headers, clinic_client, cleaning):
    response = await http.post(
        "/api/appointments",
        json={
            "appointmentDate": "2024-07-01",
            "appointmentTime": "10:00",
            "client": clinic_client.id,
            "services": [cleaning.id],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]
