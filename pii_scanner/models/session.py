"""Scan session models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from pii_scanner.models.detection import Detection, ScanStatistics
from pii_scanner.models.timeutils import utcnow


class ScanStatus(str, Enum):
    """Lifecycle status of a scan session."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class ScanSession(BaseModel):
    """In-memory state of one running or finished directory scan."""

    scan_id: str = Field(..., description="Opaque scan identifier")
    directory_path: str = Field(..., description="Root directory being scanned")
    status: ScanStatus = ScanStatus.PROCESSING

    processed_files: int = 0
    total_files: int = 0
    results: Optional[List[Detection]] = None
    statistics: Optional[ScanStatistics] = None

    reports_directory: Optional[str] = None
    error_message: Optional[str] = None

    start_time: datetime = Field(default_factory=utcnow)
    end_time: Optional[datetime] = None

    def complete(
        self,
        results: List[Detection],
        total_files: int,
        statistics: Optional[ScanStatistics] = None,
    ) -> None:
        """Mark the session as completed with its detections."""
        self.results = results
        self.statistics = statistics
        self.total_files = total_files
        self.processed_files = total_files
        self.end_time = utcnow()
        self.status = ScanStatus.COMPLETED

    def fail(self, error: str) -> None:
        """Mark the session as failed; partial results are discarded."""
        self.results = None
        self.statistics = None
        self.error_message = error
        self.end_time = utcnow()
        self.status = ScanStatus.ERROR

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()


class ScanProgress(BaseModel):
    """Progress snapshot returned to callers."""

    scan_id: str
    status: ScanStatus
    processed_files: int
    total_files: int
    pii_found: int


class ScanResults(BaseModel):
    """Statistics plus raw detections for a completed scan."""

    scan_id: str
    statistics: ScanStatistics
    detections: List[Detection] = Field(default_factory=list)
