# 📄 File: app/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to the database that stores businesses, menus and orders,
# making sure many requests can share a pool of connections without overwhelming it.
#
# 🧪 Purpose (Technical Summary):
# Implements async SQLAlchemy engine management with connection pooling, a declarative
# base shared by every module's models, health checks and optional schema creation.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine, sessions, declarative base)
# - app/shared/config/settings.py (database configuration)
# - asyncpg (PostgreSQL async driver), aiosqlite (tests)
#
# 🔄 Connected Modules / Calls From:
# - app/shared/infrastructure/database/session.py (session management)
# - All module models (Base, TimestampMixin)
# - app/api/v1/health.py (database health monitoring)
# - app/main.py (startup/shutdown)

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import Column, DateTime, Uuid, event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.shared.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def json_serializer(value: Any) -> str:
    """Serialize JSON columns with non-ASCII text kept verbatim, so stored tags stay searchable."""
    return json.dumps(value, ensure_ascii=False)


class Base(DeclarativeBase):
    """Declarative base shared by every module's models."""


class TimestampMixin:
    """
    Adds the identifier and the createdAt/updatedAt pair every entity carries.
    ``updated_at`` is refreshed by SQLAlchemy on every UPDATE.
    """

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class DatabaseConnectionManager:
    """
    Owns the async engine and the session factory built on it.
    """

    def __init__(self):
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._health_check_query = text("SELECT 1")

    def _build_connection_params(self, settings: Settings) -> Dict[str, Any]:
        """Build SQLAlchemy engine parameters from settings."""
        params: Dict[str, Any] = {
            "url": settings.database_url,
            "echo": settings.DEBUG,
            "pool_pre_ping": True,
            "json_serializer": json_serializer,
        }
        if not settings.is_sqlite:
            params.update({
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
                "pool_recycle": settings.DB_POOL_RECYCLE,
                "connect_args": {
                    "server_settings": {"application_name": "menu_management_api"},
                    "command_timeout": 60,
                },
            })
        return params

    async def initialize(self, settings: Optional[Settings] = None) -> None:
        """Create the engine, verify connectivity and optionally create tables."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        settings = settings or get_settings()
        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**self._build_connection_params(settings))

        if settings.is_sqlite:
            self._register_sqlite_pragmas()

        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )

        try:
            async with self._engine.begin() as conn:
                await conn.execute(self._health_check_query)
                if settings.DB_CREATE_TABLES:
                    await conn.run_sync(Base.metadata.create_all)
                    logger.info("Database tables created")
        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            await self.close()
            raise

        logger.info("Database connection pool initialized successfully")

    def _register_sqlite_pragmas(self) -> None:
        @event.listens_for(self._engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            # ON DELETE CASCADE is only honored with foreign keys switched on
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    async def health_check(self) -> Dict[str, Any]:
        """Run ``SELECT 1`` and report a structured status."""
        if self._engine is None:
            return {
                "status": "unhealthy",
                "error": "Database engine not initialized",
                "timestamp": utcnow().isoformat(),
            }

        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(self._health_check_query)
                result.scalar()
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": "Database unreachable",
                "timestamp": utcnow().isoformat(),
            }

        return {"status": "healthy", "timestamp": utcnow().isoformat()}

    async def close(self) -> None:
        """Dispose the engine and all pooled connections."""
        if self._engine is None:
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection pool closed successfully")

    @property
    def session_factory(self) -> Optional[async_sessionmaker]:
        return self._session_factory

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None


# Global database connection manager instance
db_manager = DatabaseConnectionManager()


async def init_database(settings: Optional[Settings] = None) -> None:
    """Initialize the global database connection manager."""
    await db_manager.initialize(settings)


async def close_database() -> None:
    """Close the global database connection manager."""
    await db_manager.close()


def get_session_factory() -> async_sessionmaker:
    """
    Get the session factory bound to the global engine.

    Raises:
        RuntimeError: If database is not initialized
    """
    if db_manager.session_factory is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return db_manager.session_factory


async def database_health_check() -> Dict[str, Any]:
    """Perform database health check."""
    return await db_manager.health_check()
