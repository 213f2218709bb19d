# tests/conftest.py
import os
import sys
from pathlib import Path

# Resolve backend/ folder and add it to sys.path
BACKEND_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BACKEND_DIR))

# Settings are read at import time, so these must be set before bizadmin loads.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bizadmin.core.security import create_access_token  # noqa: E402
from bizadmin.database import Base, get_db  # noqa: E402
from bizadmin.main import app  # noqa: E402
from factories import ADMIN_PASSWORD, create_user  # noqa: E402


# ===== DATABASE =====

@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# ===== HTTP CLIENT =====

@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ===== AUTH =====

@pytest_asyncio.fixture
async def admin_user(db):
    return await create_user(
        db,
        name="Admin User",
        username="admin",
        email="admin@example.com",
        role="admin",
        password=ADMIN_PASSWORD,
    )


@pytest.fixture
def auth_headers(admin_user) -> dict:
    token, _ = create_access_token(admin_user.id)
    return {"Authorization": f"Bearer {token}"}
