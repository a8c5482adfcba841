"""Concurrent recursive directory scanner."""

import asyncio
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from pii_scanner.analyzers.exposure_analyzer import PermissionInspector
from pii_scanner.detectors.patterns import BeninPIIPatterns
from pii_scanner.models import Detection, PIIType, Settings, get_settings
from pii_scanner.processors import TextExtractor
from pii_scanner.utils import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


class DirectoryScanner:
    """Scan every eligible file under a directory for PII."""

    def __init__(
        self,
        registry=BeninPIIPatterns,
        extractor: Optional[TextExtractor] = None,
        permission_inspector: Optional[PermissionInspector] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize directory scanner.

        Args:
            registry: Pattern registry exposing ``detect``
            extractor: Text extractor (defaults to TextExtractor)
            permission_inspector: Permission inspector (defaults to PermissionInspector)
            settings: Scanner settings (defaults to the global settings)
        """
        self.registry = registry
        self.extractor = extractor or TextExtractor()
        self.permission_inspector = permission_inspector or PermissionInspector()
        self.settings = settings or get_settings()

        self.included_extensions = set(self.settings.included_extensions)
        self.excluded_extensions = set(self.settings.excluded_extensions)
        self.excluded_folders = list(self.settings.excluded_folders)

        self.total_files_scanned = 0
        self._lock = threading.Lock()

    def collect_files(self, root: Path) -> List[Path]:
        """
        Enumerate eligible files under ``root``.

        A file is skipped when any of its parent folders (below ``root``) has an
        excluded name, when its extension is excluded, or when its extension is
        not in the included set.

        Args:
            root: Directory to enumerate

        Returns:
            Sorted list of file paths
        """
        excluded_folders = {name.lower() for name in self.excluded_folders}
        files = []

        for dirpath, dirnames, filenames in os.walk(root):
            # Prune excluded folders in place so os.walk never descends into them
            dirnames[:] = [d for d in dirnames if d.lower() not in excluded_folders]

            for filename in filenames:
                extension = os.path.splitext(filename)[1].lower()
                if extension in self.excluded_extensions:
                    continue
                if extension not in self.included_extensions:
                    continue
                files.append(Path(dirpath) / filename)

        return sorted(files)

    async def scan_directory(
        self,
        root: str,
        progress: Optional[ProgressCallback] = None,
        pii_types: Optional[Iterable[PIIType]] = None,
    ) -> List[Detection]:
        """
        Scan a directory tree.

        Args:
            root: Directory to scan
            progress: Called with ``(processed, total)`` after each file
            pii_types: Restrict detection to these types (None for all)

        Returns:
            All detections, in no particular order across files

        Raises:
            ValueError: If ``root`` is not an existing directory
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise ValueError(f"Directory does not exist: {root}")

        files = await asyncio.to_thread(self.collect_files, root_path)
        total = len(files)
        self.total_files_scanned = total

        logger.info(f"Found {total} files to scan in {root}")

        detections: List[Detection] = []
        processed = 0
        wanted = list(pii_types) if pii_types is not None else None
        semaphore = asyncio.Semaphore(self.settings.max_workers)

        async def process_with_semaphore(file_path: Path) -> None:
            nonlocal processed

            async with semaphore:
                try:
                    found = await asyncio.to_thread(self._process_single_file, file_path, wanted)
                except Exception as e:
                    logger.warning(f"Skipping {file_path}: {e}")
                    found = []

            with self._lock:
                detections.extend(found)
                processed += 1
                done = processed

            if progress is not None:
                try:
                    progress(done, total)
                except Exception as e:
                    logger.warning(f"Progress callback failed: {e}")

        await asyncio.gather(*(process_with_semaphore(f) for f in files))

        logger.info(f"Scan of {root} complete: {total} files, {len(detections)} PII")
        return detections

    def _process_single_file(
        self, file_path: Path, pii_types: Optional[List[PIIType]]
    ) -> List[Detection]:
        """Extract, inspect and detect for one file (runs in a worker thread)."""
        # Read before extraction, which itself updates the access time
        last_accessed_at = datetime.fromtimestamp(file_path.stat().st_atime, tz=timezone.utc)

        text = self.extractor.extract(str(file_path))
        if not text or not text.strip():
            return []

        permission_info = self.permission_inspector.inspect(str(file_path))

        return self.registry.detect(
            text,
            str(file_path),
            last_accessed_at=last_accessed_at,
            permission_info=permission_info,
            pii_types=pii_types,
        )
