"""Dependency provider functions."""

from pii_scanner.core.container import get_container
from pii_scanner.core.scheduler import RecurrenceScheduler, ScheduledScanRunner
from pii_scanner.core.sessions import ScanSessionManager


def get_session_manager() -> ScanSessionManager:
    """
    Get the scan session manager.

    Returns:
        ScanSessionManager bound to the shared session store
    """
    return get_container().resolve("ScanSessionManager")


def get_scheduler() -> RecurrenceScheduler:
    return get_container().resolve("RecurrenceScheduler")


def get_scheduled_scan_runner() -> ScheduledScanRunner:
    return get_container().resolve("ScheduledScanRunner")
