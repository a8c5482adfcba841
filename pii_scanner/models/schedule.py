"""Recurrence rule models for scheduled scans."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class ScanFrequency(str, Enum):
    """How often a scheduled scan repeats."""

    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"


class ScheduledScan(BaseModel):
    """
    Periodic scan definition.

    Owned by the persistence layer; the scheduler only fills in
    ``last_run_at``, ``next_run_at`` and ``last_scan_id``.
    """

    id: Optional[int] = None
    name: str = Field("", description="Display name")
    directory_path: str = Field("", description="Directory to scan")

    frequency: ScanFrequency
    day_of_week: Optional[int] = Field(None, ge=0, le=6, description="0 = Sunday")
    day_of_month: Optional[int] = Field(None, ge=1, le=31, description="Clamped to 28")
    hour_of_day: int = Field(0, ge=0, le=23)

    is_active: bool = True
    last_run_at: Optional[datetime] = None
    next_run_at: Optional[datetime] = None
    last_scan_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_frequency_fields(self) -> "ScheduledScan":
        if self.frequency == ScanFrequency.WEEKLY and self.day_of_week is None:
            raise ValueError("Weekly schedules require day_of_week")
        if (
            self.frequency in (ScanFrequency.MONTHLY, ScanFrequency.QUARTERLY)
            and self.day_of_month is None
        ):
            raise ValueError(f"{self.frequency.value} schedules require day_of_month")
        return self


# Alias used by callers that talk about the rule rather than the stored record
RecurrenceRule = ScheduledScan
