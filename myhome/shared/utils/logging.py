# 📄 File: myhome/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# Sets up how the service writes its log lines, either as JSON for log collectors
# or as readable text, and tags every line with the request and user it belongs to.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting (python-json-logger), contextual information
# carried in context variables, and a single setup entry point driven by settings.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: service start-up code, migrations, tests; every module logs through
# logging.getLogger(__name__) and picks up the configuration made here

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from pythonjsonlogger.json import JsonFormatter

from myhome.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')
correlation_id_var: ContextVar[str] = ContextVar('correlation_id', default='')

SERVICE_NAME = 'myhome-community'

_logging_configured = False


def _context_fields() -> Dict[str, str]:
    fields = {}
    if request_id_var.get():
        fields['request_id'] = request_id_var.get()
    if user_id_var.get():
        fields['user_id'] = user_id_var.get()
    if correlation_id_var.get():
        fields['correlation_id'] = correlation_id_var.get()
    return fields


class ContextualFormatter(logging.Formatter):
    """
    Text formatter that adds contextual information to log records.

    Adds request ID, user ID and correlation ID to every log message
    for better traceability.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'
        self.service_name = SERVICE_NAME

    def format(self, record):
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.correlation_id = correlation_id_var.get('')
        record.hostname = self.hostname
        record.service = self.service_name
        record.timestamp = datetime.now(timezone.utc).isoformat()
        return super().format(record)


class ContextualJsonFormatter(JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per line with a stable set of keys for
    log aggregation, plus whatever request context is bound.
    """

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('timestamp', True)
        super().__init__(*args, **kwargs)
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def add_fields(self, log_data, record, message_dict):
        super().add_fields(log_data, record, message_dict)
        log_data['level'] = record.levelname
        log_data['logger'] = record.name
        log_data['module'] = record.module
        log_data['function'] = record.funcName
        log_data['line'] = record.lineno
        log_data['service'] = SERVICE_NAME
        log_data['hostname'] = self.hostname
        log_data.update(_context_fields())


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True,
    force: bool = False,
) -> logging.Logger:
    """
    Setup application logging configuration.

    Explicit arguments win over settings. Calling it again is a no-op
    unless ``force`` is set.

    Returns:
        The "startup" logger, for the caller's first messages.
    """
    global _logging_configured

    if _logging_configured and not force:
        return logging.getLogger("startup")

    settings = get_settings()
    log_level = log_level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT
    log_file = log_file or settings.LOG_FILE

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format.lower() == 'json':
        formatter: logging.Formatter = ContextualJsonFormatter('%(message)s')
    else:
        formatter = ContextualFormatter('%(timestamp)s - %(name)s - %(levelname)s - %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # SQL echo is controlled by DEBUG on the engine, keep the pool quiet
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(
    request_id: Optional[str] = None,
    user_id: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> Iterator[Dict[str, Any]]:
    """
    Bind request context for every log line emitted inside the block.

    Example:
        with log_context(request_id=req_id, user_id=acting_user):
            await community_service.delete_community(community_id)
    """
    tokens = []
    if request_id is not None:
        tokens.append((request_id_var, request_id_var.set(request_id)))
    if user_id is not None:
        tokens.append((user_id_var, user_id_var.set(user_id)))
    if correlation_id is not None:
        tokens.append((correlation_id_var, correlation_id_var.set(correlation_id)))

    try:
        yield _context_fields()
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
