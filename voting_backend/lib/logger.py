import logging
import os
from typing import Optional

# Map string log levels to logging constants
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# LogRecord attributes that are never rendered as extras
_RESERVED_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "taskName",
    ]
)


class StructuredFormatter(logging.Formatter):
    """Human-readable formatter that appends `extra` fields as key=value pairs."""

    def format(self, record):
        timestamp = self.formatTime(record, self.datefmt or "%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        logger_name = record.name.split(".")[-1][:20].ljust(20)
        message = record.getMessage()

        log_line = f"{timestamp} | {level} | {logger_name} | {message}"

        extras = []
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or value is None:
                continue

            if key == "event_type":
                extras.append(f"type={value}")
            elif key == "chainhook_uuid":
                extras.append(f"hook={value}")
            elif isinstance(value, dict):
                # For request/response dicts only show the key info
                if key == "request":
                    method = value.get("method", "")
                    path = value.get("path", "")
                    if method and path:
                        extras.append(f"request={method} {path}")
                elif key == "response":
                    status = value.get("status_code", "")
                    time_ms = value.get("process_time_ms", "")
                    if status:
                        extras.append(f"response={status}")
                    if time_ms:
                        extras.append(f"time={time_ms}ms")
                else:
                    extras.append(f"{key}={str(value)[:100]}")
            else:
                extras.append(f"{key}={value}")

        if extras:
            log_line += f" | {' '.join(extras)}"

        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"

        return log_line


def configure_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger instance with consistent formatting and level.

    Args:
        name (Optional[str]): Logger name. If None, the module logger is returned

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name if name else __name__)

    # Set log level from environment variable, default to INFO if not set
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = LOG_LEVELS.get(log_level_str, logging.INFO)
    logger.setLevel(log_level)

    # Add console handler if none exists
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_handler.setFormatter(StructuredFormatter())
        logger.addHandler(console_handler)

    return logger


def setup_uvicorn_logging():
    """Configure uvicorn and fastapi loggers to use structured formatting."""
    # Access logging is handled by LoggingMiddleware
    logging.getLogger("uvicorn.access").disabled = True

    structured_formatter = StructuredFormatter()

    for logger_name in ["uvicorn", "uvicorn.error", "fastapi"]:
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers:
            handler.setFormatter(structured_formatter)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.setFormatter(structured_formatter)
