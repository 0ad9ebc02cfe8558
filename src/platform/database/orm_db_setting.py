"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine / session maker
2. Base: declarative base for all ORM models
3. Database: session provider injected into the unit of work

Backends:
- postgresql+asyncpg in production (pooled, pre-ping)
- sqlite+aiosqlite for local runs and tests; ':memory:' shares one
  connection through StaticPool so every session sees the same tables
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

import orjson
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


def _json_serializer(value: Any) -> str:
    # JSON columns: order buyer data and category commission rates
    return orjson.dumps(value).decode()


class AsyncEngineManager:
    """
    Keeps the engine bound to the running event loop.

    A new loop (new test, new TestClient portal) gets a fresh engine, which
    also means a fresh database when running on in-memory SQLite.
    """

    def __init__(self) -> None:
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if self._engine is None or (current_loop is not None and self._loop is not current_loop):
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, replacing engine')
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._session_maker = None
            self._loop = current_loop

        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    @staticmethod
    def _create_engine() -> AsyncEngine:
        if settings.DATABASE_IS_SQLITE:
            kwargs: dict[str, Any] = {
                'connect_args': {'check_same_thread': False},
                'json_serializer': _json_serializer,
                'json_deserializer': orjson.loads,
            }
            if ':memory:' in settings.DATABASE_URL:
                kwargs['poolclass'] = StaticPool
            return create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, **kwargs)

        return create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
            json_serializer=_json_serializer,
            json_deserializer=orjson.loads,
        )

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None


# Global engine manager
_engine_manager = AsyncEngineManager()


def get_engine() -> AsyncEngine:
    return _engine_manager.get_engine()


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return _engine_manager.get_session_maker()


class Base(DeclarativeBase):
    pass


async def create_db_and_tables() -> None:
    """Create database tables if they don't exist"""
    # Registers every model on Base.metadata
    import src.service.marketplace.driven_adapter.model  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️ [DB] Tables ready')


async def dispose_engine() -> None:
    await _engine_manager.dispose()


class Database:
    """Session provider for dependency injection"""

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Rolls back automatically when the block raises"""
        session_maker = get_session_maker()
        async with session_maker() as session:
            yield session
