"""Logging utilities with automatic PII redaction."""

import re
import sys
from typing import Optional
from loguru import logger
from pii_scanner.models import get_settings


class PIIRedactor:
    """Redacts PII from log messages."""

    # Order matters: longer digit runs are replaced before shorter ones
    PATTERNS = {
        "email": r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
        "iban": r"\bBJ\s?\d{2}(?:\s?[A-Z0-9]{4}){6}\b",
        "credit_card": r"\b(?:\d{4}[\s-]?){3}\d{4}\b",
        "phone": r"(?:\+229|00229)\s?\d{2}\s?\d{2}\s?\d{2}\s?\d{2}\b",
        "national_id": r"\b\d{10,13}\b",
        "document_id": r"\b(?:BJ|RAMU[\s-]?|INE[\s-]?)\d{7,12}\b",
    }

    @classmethod
    def redact(cls, message: str) -> str:
        """
        Redact PII from a message.

        Args:
            message: Log message to redact

        Returns:
            Message with PII replaced with [REDACTED_{TYPE}]
        """
        redacted = message

        for pii_type, pattern in cls.PATTERNS.items():
            redacted = re.sub(pattern, f"[REDACTED_{pii_type.upper()}]", redacted)

        return redacted


def redaction_filter(record: dict) -> bool:
    """
    Filter function for loguru that redacts PII.

    Args:
        record: Log record dictionary

    Returns:
        True (always log, but modify the record)
    """
    try:
        settings = get_settings()
        if settings.enable_pii_redaction:
            record["message"] = PIIRedactor.redact(record["message"])
    except Exception:
        # Don't fail logging if redaction fails
        pass

    return True


def setup_logging(log_file: Optional[str] = None, log_level: Optional[str] = None) -> None:
    """
    Configure logging with PII redaction.

    Args:
        log_file: Path to log file (optional, settings value when omitted)
        log_level: Log level (default: INFO)
    """
    try:
        settings = get_settings()
        log_level = log_level or settings.log_level
        log_file = log_file or settings.log_file
    except Exception:
        log_level = log_level or "INFO"

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
        colorize=True,
        filter=redaction_filter,
    )

    if log_file:
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=log_level,
            rotation="10 MB",
            retention="30 days",
            compression="zip",
            filter=redaction_filter,
        )

    logger.debug("Logging initialized with PII redaction enabled")


def get_logger(name: str):
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logger.bind(name=name)


# Initialize on import
try:
    setup_logging()
except Exception as e:
    # Fallback basic logging
    logger.add(sys.stderr, level="INFO")
    logger.warning(f"Failed to initialize full logging: {e}")
