"""
Structured Logger - JSON log lines tagged with the current request ID
"""
import logging
import json
import sys
import threading
from typing import Dict, Optional, Any
from datetime import datetime
import uuid

LOGGER_NAME = "fund_search"

_request_context = threading.local()


class RequestIdFilter(logging.Filter):
    """Attaches the calling thread's request ID to every record"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(_request_context, 'request_id', None)
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, message, request_id and extra fields"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log_data.update(getattr(record, 'fields', {}))

        request_id = getattr(record, 'request_id', None)
        if request_id and 'request_id' not in log_data:
            log_data['request_id'] = request_id

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class StructuredLogger:
    """Keyword-argument logging API over a stdlib logger"""

    def __init__(self, log_level: str = "INFO", log_file: Optional[str] = None):
        """
        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional log file path in addition to stderr
        """
        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        self.logger.propagate = False
        self.logger.handlers = []

        handlers = [logging.StreamHandler(sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

        for handler in handlers:
            handler.setFormatter(JsonFormatter())
            handler.addFilter(RequestIdFilter())
            self.logger.addHandler(handler)

    def set_request_id(self, request_id: Optional[str]):
        _request_context.request_id = request_id

    def get_request_id(self) -> Optional[str]:
        return getattr(_request_context, 'request_id', None)

    def _log(self, level: int, message: str, fields: Dict[str, Any]):
        self.logger.log(level, message, extra={'fields': fields})

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def log_query(self, query: str, query_type: str, result_count: int,
                  response_time: float, **kwargs):
        """One line per handled query; query_type is the route that produced the results"""
        self.info("query_processed",
                  query=query[:100],
                  query_type=query_type,
                  result_count=result_count,
                  response_time_seconds=round(response_time, 3),
                  **kwargs)

    def log_resolution(self, query: str, fund_name: str, stage: str):
        self.debug("fund_resolved", query=query[:100], fund=fund_name, stage=stage)

    def log_error(self, error: Exception, context: Dict[str, Any]):
        self.error("error_occurred",
                   error_type=type(error).__name__,
                   error_message=str(error),
                   **context)

    def log_metric(self, metric_name: str, value: float, **kwargs):
        self.info("metric_recorded", metric_name=metric_name, value=value, **kwargs)


# Global logger instance
_logger_instance: Optional[StructuredLogger] = None


def get_logger(log_level: Optional[str] = None) -> StructuredLogger:
    """Get global logger instance (level from config on first use)"""
    global _logger_instance
    if _logger_instance is None:
        if log_level is None:
            from config_loader import get_config
            log_level = get_config().log_level
        _logger_instance = StructuredLogger(log_level=log_level)
    return _logger_instance


def generate_request_id() -> str:
    return uuid.uuid4().hex[:12]
