import os

os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SESSION_BACKEND"] = "memory"
os.environ["LOG_TO_FILE"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import get_async_session
from app.core.security import CredentialVerifier
from app.main import create_app
from app.models import Customer, Category, Product  # noqa: F401  (register tables)
from app.models.base import Base
from app.services.customer.customer_service import CustomerService
from app.services.customer.session_manager import CustomerSessionManager
from app.services.session.session_store import InMemorySessionStore

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()

@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session

@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()

@pytest.fixture
def verifier() -> CredentialVerifier:
    return CredentialVerifier(rounds=4)

@pytest.fixture
def manager(db_session, session_store, verifier) -> CustomerSessionManager:
    return CustomerSessionManager(CustomerService(db_session), session_store, verifier)

@pytest.fixture
def settings() -> Settings:
    return Settings()

@pytest.fixture
def test_app(settings, session_maker, session_store):
    application = create_app(settings=settings, session_store=session_store)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        """Override database dependency for testing"""
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_async_session] = override_get_db
    return application

@pytest.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client"""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac

@pytest.fixture
async def signed_up(client: AsyncClient) -> dict:
    """Customer account used by the sign-in tests"""
    credentials = {"email": "john@email.com", "password": "123456"}
    response = await client.post("/api/customers/sign-up", json=credentials)
    assert response.status_code == 200
    return credentials
