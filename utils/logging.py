import logging
from pathlib import Path

import structlog

from config import LOG_LEVEL, LOG_DIR, LOG_FILE

_configured = False

_SECRET_KEYS = {
    "access_key_id",
    "access_key_secret",
    "aws_access_key_id",
    "aws_secret_access_key",
}
_MASK = "[REDACTED]"


def _redact_processor(_logger, _name, event_dict):
    for key in _SECRET_KEYS:
        if event_dict.get(key):
            event_dict[key] = _MASK
    return event_dict

def configure_logging() -> None:
    """Configure structlog for JSON console logging once."""
    global _configured
    if _configured:
        return

    level = getattr(logging, LOG_LEVEL.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if LOG_DIR:
        log_dir = Path(LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_dir / LOG_FILE), encoding="utf-8"))
    logging.basicConfig(level=level, format="%(message)s", handlers=handlers)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            _redact_processor,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True

def get_logger(name: str):
    """Return a configured structlog logger."""
    configure_logging()
    return structlog.get_logger(name)
