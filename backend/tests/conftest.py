import uuid
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from lineup.core.security import hash_password
from lineup.db.base import Base
from lineup.db.session import get_db
from lineup.main import create_app
from lineup.models.user import User, UserRole

# Use SQLite for testing (no PostgreSQL needed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

# NullPool: every test runs on its own event loop, pooled aiosqlite connections would outlive it
engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

# SQLite compatibility: compile PostgreSQL types to SQLite equivalents
from sqlalchemy.dialects.postgresql import UUID as PG_UUID, JSONB, ENUM as PG_ENUM


@event.listens_for(engine.sync_engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _register_sqlite_compilers():
    """Register SQLite-compatible compilers for PG types."""
    from sqlalchemy.ext.compiler import compiles

    @compiles(PG_UUID, "sqlite")
    def compile_uuid(type_, compiler, **kw):
        return "VARCHAR(36)"

    @compiles(JSONB, "sqlite")
    def compile_jsonb(type_, compiler, **kw):
        return "TEXT"

    @compiles(PG_ENUM, "sqlite")
    def compile_enum(type_, compiler, **kw):
        return "VARCHAR(50)"


_register_sqlite_compilers()

ADMIN_EMAIL = "testadmin@lineup-test.org"
ADMIN_PASSWORD = "testpass123"
PRODUCER_EMAIL = "producer@lineup-test.org"
VIEWER_EMAIL = "viewer@lineup-test.org"


@pytest.fixture(autouse=True)
def reset_worker_cache():
    """The worker cache is module-level; keep it from leaking rows between tests."""
    from lineup.services.worker_service import worker_cache
    worker_cache.invalidate()
    yield
    worker_cache.invalidate()


@pytest.fixture(autouse=True)
def local_storage(tmp_path, monkeypatch):
    from lineup.config import settings
    monkeypatch.setattr(settings, "STORAGE_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "SUPABASE_URL", "")
    monkeypatch.setattr(settings, "RESEND_API_KEY", "")
    return tmp_path / "uploads"


@pytest_asyncio.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    # Import all models
    import lineup.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    app = create_app()

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _make_user(db_session: AsyncSession, email: str, role: UserRole) -> User:
    user = User(
        id=uuid.uuid4(),
        email=email,
        hashed_password=hash_password(ADMIN_PASSWORD),
        role=role,
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def _login(client: AsyncClient, email: str) -> dict:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": ADMIN_PASSWORD},
    )
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, ADMIN_EMAIL, UserRole.ADMIN)


@pytest_asyncio.fixture
async def admin_token(client: AsyncClient, admin_user: User) -> str:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    return response.json()["access_token"]


@pytest_asyncio.fixture
async def auth_headers(admin_token: str) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest_asyncio.fixture
async def producer_headers(client: AsyncClient, db_session: AsyncSession) -> dict:
    await _make_user(db_session, PRODUCER_EMAIL, UserRole.PRODUCER)
    return await _login(client, PRODUCER_EMAIL)


@pytest_asyncio.fixture
async def viewer_headers(client: AsyncClient, db_session: AsyncSession) -> dict:
    await _make_user(db_session, VIEWER_EMAIL, UserRole.VIEWER)
    return await _login(client, VIEWER_EMAIL)
