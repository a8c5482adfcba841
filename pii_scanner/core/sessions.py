"""Scan session lifecycle management."""

import asyncio
import shutil
import threading
import uuid
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from pii_scanner.analyzers.directory_scanner import DirectoryScanner
from pii_scanner.analyzers.statistics import StatisticsCalculator
from pii_scanner.events import (
    NullProgressSink,
    ProgressSink,
    ScanCompletedEvent,
    ScanFailedEvent,
    ScanProgressEvent,
    safe_publish,
)
from pii_scanner.models import (
    Detection,
    PIIType,
    ScanProgress,
    ScanResults,
    ScanSession,
    ScanStatistics,
    ScanStatus,
    Settings,
    get_settings,
    normalize_extensions,
)
from pii_scanner.reporters import CSVReporter, ExcelReporter, JSONReporter
from pii_scanner.utils import get_logger

logger = get_logger(__name__)

ScannerFactory = Callable[[Settings], DirectoryScanner]

REPORT_BASENAME = "rapport"


def default_scanner_factory(settings: Settings) -> DirectoryScanner:
    return DirectoryScanner(settings=settings)


class SessionStore:
    """Thread-safe map of scan id to session."""

    def __init__(self):
        self._sessions: Dict[str, ScanSession] = {}
        self._lock = threading.Lock()

    def add(self, session: ScanSession) -> None:
        with self._lock:
            self._sessions[session.scan_id] = session

    def get(self, scan_id: str) -> Optional[ScanSession]:
        with self._lock:
            return self._sessions.get(scan_id)

    def remove(self, scan_id: str) -> Optional[ScanSession]:
        with self._lock:
            return self._sessions.pop(scan_id, None)

    def list(self) -> List[ScanSession]:
        with self._lock:
            return list(self._sessions.values())

    def __contains__(self, scan_id: str) -> bool:
        with self._lock:
            return scan_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class ScanSessionManager:
    """
    Runs directory scans in the background and tracks their state.

    Each scan gets its own asyncio task. The task is the only writer of its
    session; callers poll ``get_progress`` or await ``wait_for``.
    """

    REPORT_FORMATS = ("csv", "json", "xlsx")

    def __init__(
        self,
        store: SessionStore,
        scanner_factory: ScannerFactory = default_scanner_factory,
        settings: Optional[Settings] = None,
        sink: Optional[ProgressSink] = None,
    ):
        """
        Initialize session manager.

        Args:
            store: Session store shared with other readers
            scanner_factory: Builds a scanner from per-scan settings
            settings: Base settings (defaults to the global settings)
            sink: Receiver of progress and terminal events
        """
        self.store = store
        self.scanner_factory = scanner_factory
        self.settings = settings or get_settings()
        self.sink = sink or NullProgressSink()
        self._tasks: Dict[str, "asyncio.Task[None]"] = {}

        self.reporters = {
            "csv": CSVReporter(),
            "json": JSONReporter(),
            "xlsx": ExcelReporter(),
        }

    async def start_scan(
        self,
        directory_path: str,
        file_types: Optional[Iterable[str]] = None,
        exclusions: Optional[Iterable[str]] = None,
        pii_types: Optional[Iterable[PIIType]] = None,
    ) -> str:
        """
        Start scanning a directory in the background.

        Args:
            directory_path: Directory to scan
            file_types: Extensions to scan instead of the configured ones
            exclusions: Extra folder names to skip
            pii_types: Restrict detection to these types

        Returns:
            Scan id
        """
        scan_id = str(uuid.uuid4())
        reports_directory = Path(self.settings.reports_root) / scan_id

        session = ScanSession(
            scan_id=scan_id,
            directory_path=directory_path,
            reports_directory=str(reports_directory),
        )
        self.store.add(session)

        scan_settings = self._scan_settings(file_types, exclusions)
        wanted = list(pii_types) if pii_types is not None else None

        self._tasks[scan_id] = asyncio.create_task(self._run(session, scan_settings, wanted))
        logger.info(f"Scan {scan_id} started on {directory_path}")

        return scan_id

    def _scan_settings(
        self, file_types: Optional[Iterable[str]], exclusions: Optional[Iterable[str]]
    ) -> Settings:
        update = {}
        if file_types:
            update["included_extensions"] = normalize_extensions(list(file_types))
        if exclusions:
            update["excluded_folders"] = list(self.settings.excluded_folders) + list(exclusions)
        return self.settings.model_copy(update=update)

    async def _run(
        self, session: ScanSession, settings: Settings, pii_types: Optional[List[PIIType]]
    ) -> None:
        scan_id = session.scan_id

        def on_progress(processed: int, total: int) -> None:
            session.processed_files = processed
            session.total_files = total
            safe_publish(self.sink, ScanProgressEvent(scan_id, processed, total))

        try:
            scanner = self.scanner_factory(settings)
            detections = await scanner.scan_directory(
                session.directory_path, progress=on_progress, pii_types=pii_types
            )
            total_files = scanner.total_files_scanned

            statistics = StatisticsCalculator.calculate(
                detections, total_files, top_limit=settings.top_risky_files_limit
            )
            await asyncio.to_thread(
                self._write_reports, Path(session.reports_directory), detections, statistics
            )

        except Exception as e:
            logger.exception(f"Scan {scan_id} failed: {e}")
            session.fail(str(e))
            safe_publish(self.sink, ScanFailedEvent(scan_id, str(e)))
            return

        session.complete(detections, total_files, statistics)
        logger.info(f"Scan {scan_id} completed: {len(detections)} PII in {total_files} files")
        safe_publish(
            self.sink,
            ScanCompletedEvent(
                scan_id,
                total_files=total_files,
                total_pii=len(detections),
                duration_seconds=session.duration_seconds or 0.0,
            ),
        )

    def _write_reports(
        self, directory: Path, detections: List[Detection], statistics: ScanStatistics
    ) -> None:
        directory.mkdir(parents=True, exist_ok=True)
        for fmt, reporter in self.reporters.items():
            reporter.export(detections, statistics, str(directory / f"{REPORT_BASENAME}.{fmt}"))

    def get_session(self, scan_id: str) -> Optional[ScanSession]:
        return self.store.get(scan_id)

    def get_progress(self, scan_id: str) -> Optional[ScanProgress]:
        """Progress snapshot of a scan, or None for an unknown id."""
        session = self.store.get(scan_id)
        if session is None:
            return None

        return ScanProgress(
            scan_id=scan_id,
            status=session.status,
            processed_files=session.processed_files,
            total_files=session.total_files,
            pii_found=len(session.results) if session.results is not None else 0,
        )

    def get_results(self, scan_id: str) -> Optional[ScanResults]:
        """Statistics and detections of a completed scan; None otherwise."""
        session = self.store.get(scan_id)
        if session is None or session.status != ScanStatus.COMPLETED:
            return None

        return ScanResults(
            scan_id=scan_id,
            statistics=session.statistics or ScanStatistics(),
            detections=session.results or [],
        )

    def get_report_path(self, scan_id: str, fmt: str) -> Optional[Path]:
        """
        Locate a generated report.

        Args:
            scan_id: Scan id
            fmt: Report format (csv, json or xlsx)

        Returns:
            Report path, or None when the scan, format or file is unknown
        """
        session = self.store.get(scan_id)
        fmt = fmt.lower().lstrip(".")
        if session is None or session.reports_directory is None or fmt not in self.REPORT_FORMATS:
            return None

        path = Path(session.reports_directory) / f"{REPORT_BASENAME}.{fmt}"
        return path if path.is_file() else None

    async def wait_for(self, scan_id: str) -> ScanSession:
        """
        Wait until a scan has finished.

        Raises:
            KeyError: If the scan id is unknown
        """
        session = self.store.get(scan_id)
        if session is None:
            raise KeyError(f"Unknown scan: {scan_id}")

        task = self._tasks.get(scan_id)
        if task is not None:
            await task
        return session

    def cleanup_scan(self, scan_id: str) -> bool:
        """
        Forget a finished scan and delete its reports.

        Returns:
            False when the scan is unknown or still processing
        """
        session = self.store.get(scan_id)
        if session is None:
            return False

        if session.status == ScanStatus.PROCESSING:
            logger.warning(f"Refusing to clean up scan {scan_id} while it is running")
            return False

        if session.reports_directory:
            shutil.rmtree(session.reports_directory, ignore_errors=True)

        self.store.remove(scan_id)
        self._tasks.pop(scan_id, None)
        logger.info(f"Scan {scan_id} cleaned up")
        return True
