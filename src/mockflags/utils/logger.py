"""
Logging utilities for the mock flag management API
"""

import logging
import sys
import json
from typing import Dict, Any, Optional
from datetime import datetime, timezone

# Extra attributes copied into structured log entries when present
EXTRA_FIELDS = ("method", "path", "status_code", "project_key", "flag_key", "event")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors"""

        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        message = f"{color}[{timestamp}] {record.levelname:8} {record.name}: {record.getMessage()}{reset}"

        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"

        return message


def setup_logging(
    level: str = "INFO",
    format_type: str = "json",
    log_file: Optional[str] = None
) -> None:
    """Setup logging configuration"""

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if format_type.lower() == "json":
        formatter = JSONFormatter()
    else:
        formatter = ColoredFormatter()

    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(numeric_level)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())  # Always use JSON for files
        file_handler.setLevel(numeric_level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        handlers=handlers,
        force=True
    )

    # Set specific logger levels
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger = logging.getLogger("mockflags")
    logger.debug(f"Logging configured (level={level}, format={format_type}, file={log_file})")


class ContextLogger:
    """Logger with context information"""

    def __init__(self, name: str, context: Dict[str, Any] = None):
        self.logger = logging.getLogger(name)
        self.context = context or {}

    def _log(self, level: int, message: str, *args, **kwargs):
        """Log with context"""
        extra = kwargs.get('extra', {})
        extra.update(self.context)
        kwargs['extra'] = extra

        self.logger.log(level, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def with_context(self, **context) -> 'ContextLogger':
        """Create new logger with additional context"""
        new_context = self.context.copy()
        new_context.update(context)
        return ContextLogger(self.logger.name, new_context)


def get_logger(name: str, **context) -> ContextLogger:
    """Get context logger"""
    return ContextLogger(name, context)


def log_request(logger: logging.Logger, method: str, path: str):
    """Log an inbound request line"""
    logger.info(
        f"{method} {path}",
        extra={
            "method": method,
            "path": path,
            "event": "request"
        }
    )


def log_error(
    logger: logging.Logger,
    error: Exception,
    context: Dict[str, Any] = None
):
    """Log error with context"""
    extra = {
        "event": "error"
    }

    if context:
        extra.update(context)

    logger.error(
        f"Error occurred: {type(error).__name__}: {error}",
        extra=extra,
        exc_info=error
    )
