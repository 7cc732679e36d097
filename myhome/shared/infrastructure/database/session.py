# 📄 File: myhome/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (like conversations with the database) ensuring each request
# gets its own clean session and that its changes are either all saved or all undone.
#
# 🧪 Purpose (Technical Summary):
# Implements async SQLAlchemy session management with dependency injection for FastAPI,
# request-level transaction handling, and session lifecycle management.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - myhome/shared/infrastructure/database/connection.py (database engine)
#
# 🔄 Connected Modules / Calls From:
# - community_management/presentation/dependencies.py (request sessions)
# - tests/test_shared.py (request session lifecycle)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from myhome.shared.core.exceptions import DatabaseError, MyHomeException, TransactionError
from myhome.shared.infrastructure.database.connection import get_database_engine

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self):
        self._session_factory: Optional[async_sessionmaker] = None
        self._initialized = False

    async def initialize(self, engine: Optional[AsyncEngine] = None) -> None:
        """Initialize the session factory with the given or the global engine."""
        try:
            engine = engine or await get_database_engine()

            self._session_factory = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,  # Keep objects accessible after commit
                autoflush=True,
            )

            self._initialized = True
            logger.info("Database session factory initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database session factory: {e}")
            raise DatabaseError(f"Session initialization failed: {e}") from e

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Commits when the block exits normally, rolls back otherwise.

        Raises:
            DatabaseError: If the session cannot be created or the database fails
            TransactionError: If an unexpected error escapes the block
        """
        if not self._initialized or self._session_factory is None:
            raise DatabaseError("Session manager not initialized")

        session: AsyncSession = self._session_factory()

        try:
            logger.debug("Database session created")
            yield session

            await session.commit()
            logger.debug("Database transaction committed successfully")

        except MyHomeException:
            await session.rollback()
            logger.error("Service error occurred, transaction rolled back", exc_info=True)
            raise

        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(f"Database operation failed: {e}") from e

        except Exception as e:
            await session.rollback()
            logger.error(f"Unexpected error occurred, transaction rolled back: {e}")
            raise TransactionError(f"Transaction failed: {e}") from e

        finally:
            await session.close()
            logger.debug("Database session closed")

    def is_initialized(self) -> bool:
        """Check if session manager is initialized."""
        return self._initialized


# Global session manager instance
session_manager = DatabaseSessionManager()


async def initialize_sessions(engine: Optional[AsyncEngine] = None) -> None:
    """Initialize the global database session manager."""
    await session_manager.initialize(engine)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides database sessions.

    Usage:
        @router.delete("/communities/{community_id}")
        async def delete_community(
            community_id: str,
            service: CommunityService = Depends(get_community_service),
        ):
            ...

    Yields:
        AsyncSession: Database session committed at the end of the request
    """
    async with session_manager.get_session() as session:
        yield session

