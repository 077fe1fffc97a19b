# conftest.py
import os
import random

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth_service import issue_token
from codenames import CodenameGenerator
from database import get_db
from dependencies import get_codename_generator
from main import app
from models import Base, UserDB, UserRole
from security import get_password_hash


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def generator():
    return CodenameGenerator(random.Random(1337))


@pytest_asyncio.fixture
async def client(session_factory, generator):
    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_codename_generator] = lambda: generator
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(session_factory, email: str, role: UserRole) -> UserDB:
    async with session_factory() as session:
        user = UserDB(email=email, hashed_password=get_password_hash("secret123"), role=role.value)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest_asyncio.fixture
async def admin_headers(session_factory):
    admin = await _make_user(session_factory, "admin@imf.gov", UserRole.ADMIN)
    return {"Authorization": f"Bearer {issue_token(admin)}"}


@pytest_asyncio.fixture
async def agent_headers(session_factory):
    agent = await _make_user(session_factory, "agent@imf.gov", UserRole.AGENT)
    return {"Authorization": f"Bearer {issue_token(agent)}"}
