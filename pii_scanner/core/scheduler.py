"""Recurrence computation and execution of scheduled scans."""

import asyncio
import os
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional

from pii_scanner.models import ScanFrequency, ScheduledScan
from pii_scanner.models.timeutils import ensure_utc, utcnow
from pii_scanner.utils import get_logger

logger = get_logger(__name__)

# Keeps monthly runs valid in February
MAX_DAY_OF_MONTH = 28

FAILED_SCAN_ID = "ERROR"


class RecurrenceScheduler:
    """Computes when periodic scans should next run. All times are UTC."""

    def compute_next_run(self, rule: ScheduledScan, from_time: datetime) -> datetime:
        """
        Compute the first run strictly after ``from_time``.

        Args:
            rule: Recurrence rule
            from_time: Reference time; naive values are treated as UTC

        Returns:
            Next run time (timezone-aware UTC, on the hour)
        """
        from_time = ensure_utc(from_time)

        if rule.frequency == ScanFrequency.DAILY:
            return self._next_daily(from_time, rule.hour_of_day)
        if rule.frequency == ScanFrequency.WEEKLY:
            return self._next_weekly(from_time, rule.day_of_week, rule.hour_of_day)
        if rule.frequency == ScanFrequency.MONTHLY:
            return self._next_monthly(from_time, rule.day_of_month, rule.hour_of_day, 1)
        if rule.frequency == ScanFrequency.QUARTERLY:
            return self._next_monthly(from_time, rule.day_of_month, rule.hour_of_day, 3)

        raise ValueError(f"Unsupported frequency: {rule.frequency}")

    @staticmethod
    def _at_hour(day: datetime, hour: int) -> datetime:
        return day.replace(hour=hour, minute=0, second=0, microsecond=0)

    def _next_daily(self, from_time: datetime, hour: int) -> datetime:
        next_run = self._at_hour(from_time, hour)
        if next_run <= from_time:
            next_run += timedelta(days=1)
        return next_run

    def _next_weekly(self, from_time: datetime, day_of_week: int, hour: int) -> datetime:
        # day_of_week counts from Sunday = 0, datetime.weekday() from Monday = 0
        current = (from_time.weekday() + 1) % 7
        days_ahead = (day_of_week - current + 7) % 7

        next_run = self._at_hour(from_time + timedelta(days=days_ahead), hour)
        if next_run <= from_time:
            next_run += timedelta(days=7)
        return next_run

    def _next_monthly(
        self, from_time: datetime, day_of_month: int, hour: int, step_months: int
    ) -> datetime:
        day = min(day_of_month, MAX_DAY_OF_MONTH)
        next_run = self._at_hour(from_time.replace(day=day), hour)

        if next_run <= from_time:
            month_index = from_time.month - 1 + step_months
            next_run = next_run.replace(
                year=from_time.year + month_index // 12, month=month_index % 12 + 1
            )
        return next_run

    def should_run_now(self, rule: ScheduledScan, now: Optional[datetime] = None) -> bool:
        """True when the rule is active and its next run is due."""
        if not rule.is_active or rule.next_run_at is None:
            return False
        return ensure_utc(rule.next_run_at) <= (ensure_utc(now) or utcnow())

    def initialize_next_run(self, rule: ScheduledScan, now: Optional[datetime] = None) -> None:
        rule.next_run_at = self.compute_next_run(rule, now or utcnow())

    def update_after_execution(
        self, rule: ScheduledScan, scan_id: str, now: Optional[datetime] = None
    ) -> None:
        """Record a run and schedule the following one."""
        now = ensure_utc(now) or utcnow()
        rule.last_run_at = now
        rule.last_scan_id = scan_id
        rule.next_run_at = self.compute_next_run(rule, now)


class ScheduledScanRunner:
    """Starts due scheduled scans through the session manager."""

    def __init__(self, session_manager, scheduler: Optional[RecurrenceScheduler] = None):
        """
        Initialize runner.

        Args:
            session_manager: ScanSessionManager used to start scans
            scheduler: Recurrence scheduler (a default one is created when omitted)
        """
        self.session_manager = session_manager
        self.scheduler = scheduler or RecurrenceScheduler()

    async def run_due(
        self, rules: Iterable[ScheduledScan], now: Optional[datetime] = None
    ) -> List[str]:
        """
        Start every due scan.

        Rules whose directory no longer exists are deactivated. A rule whose
        scan fails to start is still advanced so it does not retry in a loop.

        Args:
            rules: Scheduled scans to check (updated in place)
            now: Reference time

        Returns:
            Scan ids of the scans started
        """
        now = ensure_utc(now) or utcnow()
        due = [rule for rule in rules if self.scheduler.should_run_now(rule, now)]

        if due:
            logger.info(f"Found {len(due)} scheduled scan(s) to run")

        started = []
        for rule in due:
            if not os.path.isdir(rule.directory_path):
                logger.warning(
                    f"Directory '{rule.directory_path}' no longer exists, "
                    f"deactivating scheduled scan '{rule.name}'"
                )
                rule.is_active = False
                continue

            try:
                scan_id = await self.session_manager.start_scan(rule.directory_path)
            except Exception as e:
                logger.error(f"Failed to start scheduled scan '{rule.name}': {e}")
                self.scheduler.update_after_execution(rule, FAILED_SCAN_ID, now)
                continue

            self.scheduler.update_after_execution(rule, scan_id, now)
            started.append(scan_id)
            logger.info(
                f"Scheduled scan '{rule.name}' started (scan {scan_id}), "
                f"next run at {rule.next_run_at:%Y-%m-%d %H:%M} UTC"
            )

        return started

    async def run_forever(
        self,
        load_rules: Callable[[], Iterable[ScheduledScan]],
        interval_seconds: float = 60,
        stop_event: Optional[asyncio.Event] = None,
    ) -> None:
        """
        Poll ``load_rules`` and start due scans until ``stop_event`` is set.

        Errors of one polling round are logged and the loop keeps going.
        """
        stop_event = stop_event or asyncio.Event()
        logger.info("Scheduled scan runner started")

        while not stop_event.is_set():
            try:
                await self.run_due(load_rules())
            except Exception as e:
                logger.error(f"Error while checking scheduled scans: {e}")

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval_seconds)
            except asyncio.TimeoutError:
                pass

        logger.info("Scheduled scan runner stopped")
