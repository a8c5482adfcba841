"""Scan progress events and sinks."""

from .events import Event, EventType, ScanProgressEvent, ScanCompletedEvent, ScanFailedEvent
from .sink import ProgressSink, NullProgressSink, QueueProgressSink, safe_publish

__all__ = [
    "Event",
    "EventType",
    "ScanProgressEvent",
    "ScanCompletedEvent",
    "ScanFailedEvent",
    "ProgressSink",
    "NullProgressSink",
    "QueueProgressSink",
    "safe_publish",
]
