"""
Shared fixtures: an in-memory SQLite database per test and an HTTP client
bound to the app with the database dependency overridden.
"""

from typing import Any, AsyncGenerator, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from config.settings import config
from database.models import Base
from database.session import get_db_session
from main import app


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Minimum bcrypt cost so the suite stays quick."""
    monkeypatch.setattr(config, "bcrypt_rounds", 4)


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def _override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ── helpers ────────────────────────────────────────────────────────────────────


def user_payload(n: int = 1, **overrides) -> Dict[str, Any]:
    """Registration body with unique email/username per ``n``."""
    body = {
        "email": f"user{n}@example.com",
        "username": f"user{n}",
        "password": "password123",
    }
    body.update(overrides)
    return body


async def register(client: AsyncClient, n: int = 1, **overrides) -> Dict[str, Any]:
    resp = await client.post("/auth/register", json=user_payload(n, **overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()


async def login_headers(client: AsyncClient, n: int = 1) -> Dict[str, str]:
    body = user_payload(n)
    resp = await client.post(
        "/auth/login", json={"email": body["email"], "password": body["password"]}
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}
