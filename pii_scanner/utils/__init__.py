"""Utility functions and helpers."""

from .logger import setup_logging, get_logger, PIIRedactor

__all__ = ["setup_logging", "get_logger", "PIIRedactor"]
