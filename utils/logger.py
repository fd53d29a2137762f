"""
Logging for the Property Enquiry backend
Console plus JSON file logs with request-scoped context
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from contextvars import ContextVar
from pathlib import Path
import os

# Set per request by RequestContext
request_id_context: ContextVar[str] = ContextVar('request_id', default='')

class StructuredFormatter(logging.Formatter):
    """Formats records as one JSON object per line"""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        request_id = request_id_context.get()
        if request_id:
            log_entry['request_id'] = request_id

        if hasattr(record, 'extra_data'):
            log_entry.update(record.extra_data)

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)

class APILogger:
    """Wraps a stdlib logger so keyword arguments become structured fields"""

    def __init__(self, name: str = 'property_enquiry', log_dir: Optional[str] = None):
        self.logger = logging.getLogger(name)
        self.log_dir = Path(log_dir or os.getenv('LOG_DIR', 'logs'))
        self._setup_logger()

    def _setup_logger(self):
        self.logger.handlers = []

        log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        self.logger.setLevel(getattr(logging, log_level, logging.INFO))

        self.log_dir.mkdir(parents=True, exist_ok=True)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)

        file_handler = logging.FileHandler(self.log_dir / 'app.log')
        file_handler.setLevel(logging.INFO)

        error_handler = logging.FileHandler(self.log_dir / 'errors.log')
        error_handler.setLevel(logging.ERROR)

        # JSON on the console only in production
        if os.getenv('NODE_ENV') == 'production':
            console_handler.setFormatter(StructuredFormatter())
        else:
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
        file_handler.setFormatter(StructuredFormatter())
        error_handler.setFormatter(StructuredFormatter())

        self.logger.addHandler(console_handler)
        self.logger.addHandler(file_handler)
        self.logger.addHandler(error_handler)

    def _log_with_context(self, level: int, message: str, extra_data: Optional[Dict[str, Any]] = None,
                          exc_info: bool = False):
        if extra_data:
            self.logger.log(level, message, exc_info=exc_info, extra={'extra_data': extra_data})
        else:
            self.logger.log(level, message, exc_info=exc_info)

    def debug(self, message: str, **kwargs):
        self._log_with_context(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log_with_context(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log_with_context(logging.WARNING, message, kwargs)

    def error(self, message: str, error: Optional[BaseException] = None, **kwargs):
        """Log an error; pass the exception to include its traceback"""
        if error is not None:
            kwargs.setdefault('error_type', type(error).__name__)
            self.logger.error(message, exc_info=(type(error), error, error.__traceback__),
                              extra={'extra_data': kwargs})
        else:
            self._log_with_context(logging.ERROR, message, kwargs)

logger = APILogger()

def log_api_request(method: str, path: str, status_code: int, duration: float):
    """Log a completed HTTP request"""
    logger.info(
        f"API Request: {method} {path}",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )

def log_database_operation(operation: str, table: str, duration: float, affected_rows: int = None):
    """Log a datastore call"""
    logger.info(
        f"Database: {operation} on {table}",
        operation=operation,
        table=table,
        duration_ms=round(duration * 1000, 2),
        affected_rows=affected_rows
    )

def log_validation_error(field: str, value: Any, error_message: str):
    """Log a rejected form value"""
    logger.warning(
        f"Validation error: {field}",
        field=field,
        value=str(value),
        error_message=error_message
    )

def log_business_event(event: str, entity_type: str, entity_id: str = None, details: Dict[str, Any] = None):
    """Log domain events (enquiry submitted, webhook relayed, ...)"""
    logger.info(
        f"Business event: {event}",
        event=event,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details or {}
    )

class RequestContext:
    """Binds a request id to every log line emitted inside the block"""

    def __init__(self, request_id: str):
        self.request_id = request_id
        self.request_token = None

    def __enter__(self):
        self.request_token = request_id_context.set(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        request_id_context.reset(self.request_token)
