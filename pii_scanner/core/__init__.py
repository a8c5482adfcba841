"""Scan orchestration, scheduling and dependency injection."""

from .container import Container, get_container, reset_container
from .sessions import ScanSessionManager, SessionStore
from .scheduler import RecurrenceScheduler, ScheduledScanRunner
from .dependencies import get_session_manager, get_scheduler, get_scheduled_scan_runner

__all__ = [
    "Container",
    "get_container",
    "reset_container",
    "ScanSessionManager",
    "SessionStore",
    "RecurrenceScheduler",
    "ScheduledScanRunner",
    "get_session_manager",
    "get_scheduler",
    "get_scheduled_scan_runner",
]
