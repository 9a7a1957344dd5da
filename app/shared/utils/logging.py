# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the logging system that records what happens in the menu service
# in a structured way, so every line can be traced back to the request that caused it.

# 🧪 Purpose (Technical Summary):
# Implements structured logging with JSON formatting and request-id context tracking
# for the API process.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (startup), app.api.middleware.logging (request ids),
# every module through logging.getLogger(__name__)

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional
from uuid import uuid4

from pythonjsonlogger import jsonlogger

from app.shared.config.settings import Settings, get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

SERVICE_NAME = 'menu-management-api'

_logging_configured = False


class RequestContextFilter(logging.Filter):
    """
    Stamps request ID, user ID and service information onto every record
    so both the JSON and text formatters can reference them.
    """

    def __init__(self):
        super().__init__()
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get('')
        record.user_id = user_id_var.get('')
        record.service = SERVICE_NAME
        record.hostname = self.hostname
        return True


class JSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs logs in JSON format with consistent structure for
    log aggregation and analysis tools.
    """

    def __init__(self):
        super().__init__(
            '%(asctime)s %(levelname)s %(name)s %(message)s',
            rename_fields={'asctime': 'timestamp', 'levelname': 'level', 'name': 'logger'},
        )

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['service'] = getattr(record, 'service', SERVICE_NAME)
        log_record['module'] = record.module
        log_record['line'] = record.lineno
        if getattr(record, 'request_id', ''):
            log_record['request_id'] = record.request_id
        if getattr(record, 'user_id', ''):
            log_record['user_id'] = record.user_id


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the root logger once per process.

    Args:
        settings: Application settings; defaults to the cached settings

    Returns:
        logging.Logger: The startup logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    settings = settings or get_settings()
    numeric_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    if settings.LOG_FORMAT == 'json':
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestContextFilter())
    root_logger.addHandler(console_handler)

    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('passlib').setLevel(logging.ERROR)

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(request_id: Optional[str] = None, user_id: Optional[str] = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier; generated when omitted
        user_id: User identifier
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield request_id
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)
