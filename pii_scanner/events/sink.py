"""Progress sinks receiving scan events."""

import asyncio
from typing import List, Protocol

from pii_scanner.events.events import Event
from pii_scanner.utils import get_logger

logger = get_logger(__name__)


class ProgressSink(Protocol):
    """Receiver of scan progress and terminal events."""

    def publish(self, event: Event) -> None:
        ...


class NullProgressSink:
    """Discards every event."""

    def publish(self, event: Event) -> None:
        pass


class QueueProgressSink:
    """Puts events on an asyncio queue for a consumer to drain."""

    def __init__(self, queue: "asyncio.Queue[Event] | None" = None):
        self.queue: "asyncio.Queue[Event]" = queue or asyncio.Queue()

    def publish(self, event: Event) -> None:
        self.queue.put_nowait(event)

    def drain(self) -> List[Event]:
        """Return every queued event without waiting."""
        events = []
        while not self.queue.empty():
            events.append(self.queue.get_nowait())
        return events


def safe_publish(sink: ProgressSink, event: Event) -> None:
    """Publish ``event``; sink failures are logged and never propagate."""
    try:
        sink.publish(event)
    except Exception as e:
        logger.warning(f"Progress sink failed on {event.event_type}: {e}")
