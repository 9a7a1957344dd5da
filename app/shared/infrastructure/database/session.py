# 📄 File: app/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Gives every web request its own private conversation with the database and
# makes sure a failed request leaves nothing half-written behind.
#
# 🧪 Purpose (Technical Summary):
# FastAPI dependency and context manager yielding an AsyncSession per unit of work;
# rolls back on exception and always closes. Services commit explicitly.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession)
# - app/shared/infrastructure/database/connection.py (session factory)
#
# 🔄 Connected Modules / Calls From:
# - Every module's presentation routes (Depends(get_db_session))
# - app/modules/dashboard (one session per concurrent count)
# - app/main.py (startup seeding)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.infrastructure.database.connection import get_session_factory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def database_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for manual database session management.

    Example:
        async with database_session() as db:
            role = await role_service.get_by_slug(db, "admin")

    Yields:
        AsyncSession: Database session
    """
    session: AsyncSession = get_session_factory()()
    try:
        yield session
    except Exception:
        await session.rollback()
        logger.debug("Database session rolled back")
        raise
    finally:
        await session.close()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides database sessions.

    Usage:
        @router.post("/")
        async def create_role(
            payload: RoleCreateRequest,
            db: AsyncSession = Depends(get_db_session)
        ):
            ...

    Yields:
        AsyncSession: Database session
    """
    async with database_session() as session:
        yield session
