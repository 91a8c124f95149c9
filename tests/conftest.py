import base64
import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the application settings are read
os.environ["ENVIRONMENT"] = "testing"

from signup_backend.core.database import get_db  # noqa: E402
from signup_backend.core.rate_limiter import SlidingWindowRateLimiter  # noqa: E402
from signup_backend.main import create_app  # noqa: E402
from signup_backend.models import Base  # noqa: E402


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
ADMIN_PATH = "/admin-panel-xyz"
ADMIN_PASSWORD = "correct horse battery"


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start: float = 1_700_000_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def basic_auth(password: str, username: str = "admin") -> dict:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest_asyncio.fixture
async def async_engine():
    """Create an async engine for testing."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(async_engine):
    """Create an async session for testing."""
    async_session_maker = async_sessionmaker(
        async_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def override_get_db(async_session):
    """Override the get_db dependency."""

    async def _override_get_db():
        try:
            yield async_session
        except Exception:
            await async_session.rollback()
            raise

    return _override_get_db


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(clock):
    return SlidingWindowRateLimiter(window_ms=60000, max_requests=5, clock=clock)


@pytest_asyncio.fixture
async def app(override_get_db, rate_limiter):
    """Fresh application per test so limiter state never leaks between tests."""
    application = create_app(rate_limiter=rate_limiter)
    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """Create test client with overridden database."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def initialized_admin(client: AsyncClient):
    """Run the one-time admin setup and return the password."""
    response = await client.post(ADMIN_PATH, data={"setup_password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return ADMIN_PASSWORD


@pytest.fixture
def signup_data():
    """Sample signup submission."""
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
    }
