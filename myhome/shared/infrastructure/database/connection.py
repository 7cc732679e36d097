# 📄 File: myhome/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to our database, making sure we can talk to our data storage
# and handling multiple connections efficiently without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Implements async SQLAlchemy engine management with connection pooling, the declarative Base for all ORM models, and the SQLite driver hooks
# needed for foreign keys and SAVEPOINT-based nested units of work.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine)
# - myhome/shared/config/settings.py (database configuration)
# - asyncpg (PostgreSQL async driver) / aiosqlite (tests)
#
# 🔄 Connected Modules / Calls From:
# - myhome/shared/infrastructure/database/session.py (session management)
# - community_management ORM models (Base)
# - migrations/env.py (metadata)

import logging
from typing import Any, Dict, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from myhome.shared.config.settings import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by every ORM model in the service."""


class DatabaseConnectionManager:
    """
    Manages the async engine, its connection pool and the ORM schema.
    """

    def __init__(self, database_url: Optional[str] = None):
        self._settings = get_settings()
        self._database_url = database_url or self._settings.database_url
        self._engine: Optional[AsyncEngine] = None

    @property
    def is_sqlite(self) -> bool:
        return self._database_url.startswith("sqlite")

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy connection parameters from settings."""
        if self.is_sqlite:
            params: Dict[str, Any] = {
                "url": self._database_url,
                "echo": self._settings.debug,
            }
            if ":memory:" in self._database_url or self._database_url.endswith("://"):
                # one shared connection, otherwise every checkout sees an empty database
                params["poolclass"] = StaticPool
            return params

        return {
            "url": self._database_url,
            "echo": self._settings.debug,
            "echo_pool": self._settings.debug,
            "pool_pre_ping": True,
            "pool_recycle": self._settings.database_pool_recycle,
            "pool_size": self._settings.database_pool_size,
            "max_overflow": self._settings.database_max_overflow,
            "pool_timeout": self._settings.database_pool_timeout,
            "connect_args": {
                "server_settings": {
                    "application_name": "myhome_community",
                    "jit": "off"
                },
                "command_timeout": 60,
            }
        }

    async def initialize(self) -> None:
        """Initialize database engine with connection pooling."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        try:
            logger.info("Initializing database connection pool...")
            self._engine = create_async_engine(**self._build_connection_params())
            self._register_connection_events()
            logger.info("Database engine created")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            raise

    def _register_connection_events(self) -> None:
        """Register SQLAlchemy connection event listeners."""
        if self._engine is None or not self.is_sqlite:
            return

        @event.listens_for(self._engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """Hand transaction control to SQLAlchemy and enforce foreign keys."""
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(self._engine.sync_engine, "begin")
        def do_begin(conn):
            conn.exec_driver_sql("BEGIN")

    async def create_tables(self) -> None:
        """Create every table registered on Base.metadata."""
        if self._engine is None:
            raise RuntimeError("Database engine not initialized")

        # import for side effects: registers the ORM tables on Base.metadata
        from myhome.modules.community_management.infrastructure.database import models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        logger.info("Database connection pool closed successfully")

    @property
    def engine(self) -> Optional[AsyncEngine]:
        """Get the SQLAlchemy async engine."""
        return self._engine

    @property
    def is_initialized(self) -> bool:
        """Check if database engine is initialized."""
        return self._engine is not None


# Global database connection manager instance
db_manager = DatabaseConnectionManager()


async def initialize_database() -> None:
    """Initialize the global database connection manager."""
    try:
        logger.info("Starting database initialization...")
        await db_manager.initialize()
        logger.info("Database initialization completed successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}", exc_info=True)
        raise


async def close_database() -> None:
    """Close the global database connection manager."""
    await db_manager.close()


async def get_database_engine() -> AsyncEngine:
    """
    Get the database engine instance.

    Raises:
        RuntimeError: If database is not initialized
    """
    if not db_manager.is_initialized:
        raise RuntimeError("Database not initialized. Call initialize_database() first.")

    return db_manager.engine
