
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from back.main import app
from database.database import session_manager
from database.redis import get_redis_client

from .fakes import FakeMailer, FakeRedis


@pytest_asyncio.fixture
async def db(tmp_path):
    session_manager.init(f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}")
    await session_manager.create_all()
    yield session_manager
    await session_manager.close()


@pytest.fixture
def redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest_asyncio.fixture
async def client(db, redis):
    app.dependency_overrides[get_redis_client] = lambda: redis
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
