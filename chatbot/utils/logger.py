import json
import logging
import sys
from typing import Any, Dict, Optional, Tuple
import uuid

from chatbot.config import Settings, get_settings

# Attributes every LogRecord carries; anything else was passed through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

_NOISY_LOGGERS = ("uvicorn.access", "uvicorn.error", "fastapi", "pymongo")


class CustomJsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def __init__(self, service: str, environment: str):
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service,
            "environment": self.environment,
        }
        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Send JSON logs to stdout at the configured level.

    Args:
        settings: Settings to read LOG_LEVEL and service labels from;
            defaults to the environment settings
    """
    settings = settings or get_settings()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter(settings.SERVICE_NAME, settings.ENVIRONMENT))
    logging.basicConfig(level=settings.LOG_LEVEL, handlers=[handler], force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Logger that stamps every record with a request correlation ID.
    """

    def __init__(
        self,
        logger: logging.Logger,
        correlation_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None
    ):
        self.correlation_id = correlation_id or str(uuid.uuid4())
        super().__init__(logger, {**(extra or {}), "correlation_id": self.correlation_id})

    def process(self, msg: Any, kwargs: Dict[str, Any]) -> Tuple[Any, Dict[str, Any]]:
        # Per-call extras win over the adapter's context, except the correlation ID.
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs


def get_request_logger(name: str, correlation_id: Optional[str] = None) -> LoggerAdapter:
    """
    Get a logger bound to one request.

    Args:
        name: Logger name
        correlation_id: Request correlation ID; a new one is generated if absent

    Returns:
        LoggerAdapter: Logger carrying the correlation ID
    """
    return LoggerAdapter(get_logger(name), correlation_id)
