# 📄 File: myhome/shared/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything needed to talk to the database from one import.
# 🧪 Purpose (Technical Summary):
# Re-exports the declarative Base, engine/session managers and unit of work.
# 🔗 Dependencies:
# connection.py, session.py, unit_of_work.py
# 🔄 Connected Modules / Calls From:
# ORM models, repository implementations, presentation dependencies, migrations

from .connection import (
    Base,
    DatabaseConnectionManager,
    close_database,
    db_manager,
    get_database_engine,
    initialize_database,
)
from .session import (
    DatabaseSessionManager,
    get_db_session,
    initialize_sessions,
    session_manager,
)
from .unit_of_work import SqlAlchemyUnitOfWork, UnitOfWork

__all__ = [
    "Base",
    "DatabaseConnectionManager",
    "DatabaseSessionManager",
    "SqlAlchemyUnitOfWork",
    "UnitOfWork",
    "close_database",
    "db_manager",
    "get_database_engine",
    "get_db_session",
    "initialize_database",
    "initialize_sessions",
    "session_manager",
]
