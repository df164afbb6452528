import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from order_service.main import app
from order_service.core.database import Base, get_db
from order_service.api.orders import get_payment_client, get_user_directory
from user_service.main import app as user_app
from user_service.core.database import Base as UserBase, get_db as get_user_db

from fakes import FakePaymentClient, FakeUserDirectory


TEST_DATABASE_URL = "sqlite+aiosqlite://"


def _memory_engine():
    return create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False
    )


@pytest_asyncio.fixture
async def db_session():
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def user_db_session():
    engine = _memory_engine()
    async with engine.begin() as conn:
        await conn.run_sync(UserBase.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def user_directory():
    return FakeUserDirectory(known_users=(1, 2))


@pytest.fixture
def payment_client():
    return FakePaymentClient()


@pytest_asyncio.fixture
async def client(db_session, user_directory, payment_client):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_user_directory] = lambda: user_directory
    app.dependency_overrides[get_payment_client] = lambda: payment_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_client(user_db_session):
    async def override_get_db():
        yield user_db_session

    user_app.dependency_overrides[get_user_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=user_app),
        base_url="http://user-service"
    ) as ac:
        yield ac

    user_app.dependency_overrides.clear()
