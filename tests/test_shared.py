# 📄 File: tests/test_shared.py
# 🧭 Purpose (Layman Explanation):
# Checks the shared plumbing: settings, error types, paging, logging and the
# database session helpers.
# 🧪 Purpose (Technical Summary):
# Unit tests for myhome.shared: Settings validation, exception serialization,
# PageRequest bounds, JSON/text log formatting with context, session manager
# commit/rollback behaviour.

import json
import logging

import pytest
from fastapi import HTTPException
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import text

from myhome.shared.config.settings import Settings, get_settings
from myhome.shared.core.exceptions import (
    ConflictError,
    DatabaseError,
    MyHomeException,
    RepositoryError,
    TransactionError,
    ValidationError,
    is_client_error,
    is_server_error,
)
from myhome.shared.core.identifiers import generate_unique_id
from myhome.shared.infrastructure.database import connection, session as session_module
from myhome.shared.infrastructure.database.connection import (
    DatabaseConnectionManager,
    close_database,
    get_database_engine,
    initialize_database,
)
from myhome.shared.infrastructure.database.session import (
    DatabaseSessionManager,
    get_db_session,
    initialize_sessions,
)
from myhome.shared.utils.logging import (
    ContextualFormatter,
    ContextualJsonFormatter,
    log_context,
    request_id_var,
    setup_logging,
)
from myhome.shared.utils.pagination import PageRequest


# =============================================================================
# SETTINGS
# =============================================================================

def test_database_url_is_assembled_from_parts():
    settings = Settings(
        DATABASE_URL=None, DB_HOST="db", DB_PORT=5433, DB_NAME="homes", DB_USER="app", DB_PASSWORD="pw"
    )

    assert settings.database_url == "postgresql+asyncpg://app:pw@db:5433/homes"
    assert settings.is_sqlite is False


def test_explicit_database_url_wins():
    settings = Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:")

    assert settings.database_url == "sqlite+aiosqlite:///:memory:"
    assert settings.is_sqlite is True


def test_settings_normalise_and_validate():
    settings = Settings(ENVIRONMENT="TEST", LOG_LEVEL="debug", LOG_FORMAT="TEXT", DOCUMENT_MAX_SIZE_KB=2)

    assert settings.ENVIRONMENT == "test"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "text"
    assert settings.document_max_size_bytes == 2048

    with pytest.raises(PydanticValidationError):
        Settings(ENVIRONMENT="moon")
    with pytest.raises(PydanticValidationError):
        Settings(MAX_PAGE_SIZE=0)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


# =============================================================================
# EXCEPTIONS AND IDS
# =============================================================================

def test_conflict_error_serialises_details():
    error = ConflictError("taken", entity="User", entity_id="u1")

    payload = error.to_dict()["error"]
    assert payload["code"] == "CONFLICT"
    assert payload["status_code"] == 409
    assert payload["details"] == {"entity": "User", "entity_id": "u1"}
    assert is_client_error(error)
    assert not is_server_error(error)


def test_to_http_exception():
    http_error = RepositoryError("down", operation="save", entity="Community").to_http_exception()

    assert isinstance(http_error, HTTPException)
    assert http_error.status_code == 500
    assert http_error.detail["code"] == "REPOSITORY_ERROR"


def test_validation_error_is_unprocessable():
    error = ValidationError("bad size", field="size", value=0)

    assert error.status_code == 422
    assert error.to_http_exception().status_code == 422
    assert is_client_error(error)


@pytest.mark.parametrize("error_class", [DatabaseError, RepositoryError, TransactionError])
def test_infrastructure_errors_are_server_errors(error_class):
    error = error_class("failure")

    assert isinstance(error, MyHomeException)
    assert is_server_error(error)


def test_unknown_exceptions_count_as_server_errors():
    assert is_server_error(RuntimeError("x"))
    assert not is_client_error(RuntimeError("x"))


def test_generated_ids_are_unique_text():
    ids = {generate_unique_id() for _ in range(100)}

    assert len(ids) == 100
    assert all(isinstance(i, str) and len(i) == 36 for i in ids)


# =============================================================================
# PAGINATION
# =============================================================================

def test_page_request_offset():
    page = PageRequest.of(page=3, size=10)

    assert page.offset == 30
    assert page.limit == 10


def test_page_request_default_size():
    assert PageRequest.of().size == get_settings().DEFAULT_PAGE_SIZE


@pytest.mark.parametrize("page,size", [(-1, 10), (0, 0), (0, 10_000)])
def test_page_request_rejects_bad_input(page, size):
    with pytest.raises(ValidationError):
        PageRequest.of(page=page, size=size)


# =============================================================================
# LOGGING
# =============================================================================

def make_record(message="hello"):
    return logging.LogRecord("myhome.test", logging.INFO, __file__, 10, message, None, None)


def test_json_formatter_includes_context():
    formatter = ContextualJsonFormatter("%(message)s")

    with log_context(request_id="req-1", user_id="u1") as context:
        line = json.loads(formatter.format(make_record()))

    assert context == {"request_id": "req-1", "user_id": "u1"}
    assert line["message"] == "hello"
    assert line["level"] == "INFO"
    assert line["service"] == "myhome-community"
    assert line["request_id"] == "req-1"
    assert line["user_id"] == "u1"


def test_log_context_resets_on_exit():
    with log_context(request_id="req-1"):
        pass

    assert request_id_var.get() == ""


def test_text_formatter_adds_request_id():
    formatter = ContextualFormatter("%(request_id)s %(levelname)s %(message)s")

    with log_context(request_id="req-9"):
        assert formatter.format(make_record()) == "req-9 INFO hello"


def test_setup_logging_writes_json_to_file(tmp_path):
    log_file = tmp_path / "logs" / "service.log"
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level

    try:
        startup = setup_logging(
            log_level="INFO", log_format="json", log_file=str(log_file), enable_console=False, force=True
        )
        startup.info("service started")
        for handler in root.handlers:
            handler.flush()

        line = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert line["message"] == "service started"
        assert line["logger"] == "startup"
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in previous_handlers:
            root.addHandler(handler)
        root.setLevel(previous_level)


# =============================================================================
# SESSION MANAGER
# =============================================================================

@pytest.mark.asyncio
async def test_session_manager_requires_initialisation():
    manager = DatabaseSessionManager()

    with pytest.raises(DatabaseError):
        async with manager.get_session():
            pass


@pytest.mark.asyncio
async def test_session_manager_wraps_unexpected_errors(engine):
    manager = DatabaseSessionManager()
    await manager.initialize(engine)

    with pytest.raises(TransactionError):
        async with manager.get_session():
            raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_session_manager_passes_service_errors_through(engine):
    manager = DatabaseSessionManager()
    await manager.initialize(engine)

    with pytest.raises(ConflictError):
        async with manager.get_session():
            raise ConflictError("taken")


@pytest.mark.asyncio
async def test_request_session_lifecycle(monkeypatch):
    monkeypatch.setattr(connection, "db_manager", DatabaseConnectionManager("sqlite+aiosqlite:///:memory:"))
    monkeypatch.setattr(session_module, "session_manager", DatabaseSessionManager())

    with pytest.raises(RuntimeError):
        await get_database_engine()

    await initialize_database()
    await initialize_sessions()
    try:
        requests = get_db_session()
        db = await requests.__anext__()
        assert (await db.execute(text("SELECT 1"))).scalar() == 1
        with pytest.raises(StopAsyncIteration):
            await requests.__anext__()
    finally:
        await close_database()

    assert connection.db_manager.is_initialized is False
