
import contextlib
from typing import Any, AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (AsyncConnection, AsyncEngine, AsyncSession,
                                    async_sessionmaker, create_async_engine)
from sqlalchemy.pool import NullPool

from config import settings
from database.models import Base


def get_db_url(user: str, password: str, ip: str, port: int, name: str) -> str:
    return f"postgresql+asyncpg://{user}:{password}@{ip}:{port}/{name}"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseSessionManager:
    """Owns the async engine and hands out sessions.

    `session` is a FastAPI dependency; `context_session` is for code running
    outside of a request, such as the reminder scheduler.
    """

    def __init__(self, url: str, engine_kwargs: dict[str, Any] | None = None) -> None:
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None
        self.init(url, engine_kwargs)

    def init(self, url: str, engine_kwargs: dict[str, Any] | None = None) -> None:
        engine_kwargs = dict(engine_kwargs or {})
        is_sqlite = url.startswith("sqlite")
        if is_sqlite:
            engine_kwargs.setdefault("poolclass", NullPool)
        self._engine = create_async_engine(url, **engine_kwargs)
        if is_sqlite:
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._sessionmaker = async_sessionmaker(bind=self._engine,
                                                expire_on_commit=False,
                                                autoflush=False)

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    @contextlib.asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        if self._engine is None:
            raise RuntimeError("DatabaseSessionManager is not initialized")
        async with self._engine.begin() as connection:
            yield connection

    @contextlib.asynccontextmanager
    async def context_session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise RuntimeError("DatabaseSessionManager is not initialized")
        session = self._sessionmaker()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.context_session() as session:
            yield session

    async def create_all(self) -> None:
        async with self.connect() as connection:
            await connection.run_sync(Base.metadata.create_all)


session_manager = DatabaseSessionManager(settings.db_url or get_db_url(settings.db_user,
                                                                       settings.db_password,
                                                                       settings.db_ip,
                                                                       settings.db_port,
                                                                       settings.db_name),
                                         {"echo": settings.db_echo})
