"""
Logging Setup
=============

Root logger configuration for the service. Library modules only create
module loggers; the entry point decides where records go.
"""

import json
import logging
from typing import Optional

from flask import has_request_context, request

from .config import JSON_LOGS


class RequestPathFilter(logging.Filter):
    """Attach the request path to log records when inside a Flask request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.path = request.path if has_request_context() else '-'
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, path."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            'ts': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'logger': record.name,
            'msg': record.getMessage(),
            'path': getattr(record, 'path', '-'),
        }
        if record.exc_info:
            base['exc'] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(json_logs: Optional[bool] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure the root logger.

    Args:
        json_logs: Emit JSON lines (defaults to PRINT_TRANSPORT_JSON_LOGS)
        level: Root log level

    Returns:
        The configured root logger
    """
    if json_logs is None:
        json_logs = JSON_LOGS

    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers on reload
    root.handlers = []

    if json_logs:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter('[%(asctime)s] %(levelname)s %(name)s %(path)s %(message)s')

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(RequestPathFilter())
    root.addHandler(handler)

    # Flask's app logger propagates to root instead of formatting twice
    flask_logger = logging.getLogger('flask.app')
    flask_logger.handlers = []
    flask_logger.propagate = True

    return root


__all__ = ['JsonFormatter', 'RequestPathFilter', 'configure_logging']
