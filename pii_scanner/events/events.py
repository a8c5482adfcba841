"""Event definitions."""

from enum import Enum
from datetime import datetime
from typing import Dict, Any
from pydantic import BaseModel, ConfigDict, Field

from pii_scanner.models.timeutils import utcnow


class EventType(str, Enum):
    """Event types."""

    SCAN_PROGRESS = "scan.progress"
    SCAN_COMPLETED = "scan.completed"
    SCAN_FAILED = "scan.failed"


class Event(BaseModel):
    """Base event class."""

    model_config = ConfigDict(use_enum_values=True)

    event_type: EventType
    timestamp: datetime = Field(default_factory=utcnow)
    source: str = "scanner"
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def scan_id(self) -> str:
        return self.data.get("scan_id", "")

    @property
    def is_terminal(self) -> bool:
        return self.event_type != EventType.SCAN_PROGRESS


class ScanProgressEvent(Event):
    """Event fired after each file of a scan has been processed."""

    event_type: EventType = EventType.SCAN_PROGRESS

    def __init__(self, scan_id: str, processed: int, total: int, **kwargs):
        super().__init__(
            data={
                "scan_id": scan_id,
                "processed": processed,
                "total": total,
            },
            **kwargs
        )


class ScanCompletedEvent(Event):
    """Event fired when a scan completes."""

    event_type: EventType = EventType.SCAN_COMPLETED

    def __init__(
        self,
        scan_id: str,
        total_files: int,
        total_pii: int,
        duration_seconds: float,
        **kwargs
    ):
        super().__init__(
            data={
                "scan_id": scan_id,
                "total_files": total_files,
                "total_pii": total_pii,
                "duration_seconds": duration_seconds,
            },
            **kwargs
        )


class ScanFailedEvent(Event):
    """Event fired when a scan fails."""

    event_type: EventType = EventType.SCAN_FAILED

    def __init__(self, scan_id: str, error: str, **kwargs):
        super().__init__(
            data={
                "scan_id": scan_id,
                "error": error,
            },
            **kwargs
        )
