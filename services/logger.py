"""
logger.py — Structured console logging for the prediction service.
"""
import logging
from datetime import datetime, timezone

LOGGER_NAME = "tipster"

_initialized = False


class StructuredFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        parts = [f"{k}={v}" for k, v in log_entry.items()]
        return " | ".join(parts)


def setup_logging(log_level="INFO"):
    """
    Configure the application logger once and return it.

    Parameters
    ----------
    log_level : str — logging level name, e.g. "DEBUG"
    """
    global _initialized
    logger = logging.getLogger(LOGGER_NAME)
    if _initialized:
        return logger

    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(StructuredFormatter())
    logger.addHandler(console)

    _initialized = True
    logger.info("Structured logging initialised")
    return logger
