"""Per-file risk aggregation and scan statistics."""

from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from pii_scanner.analyzers.exposure_analyzer import ExposureAnalyzer
from pii_scanner.analyzers.staleness_analyzer import StalenessAnalyzer
from pii_scanner.models import (
    BANKING_PII_TYPES,
    Detection,
    ExposureLevel,
    FileRiskInfo,
    PermissionInfo,
    PIIType,
    RiskLevel,
    ScanStatistics,
)
from pii_scanner.utils import get_logger

logger = get_logger(__name__)

HIGH_RISK_COUNT = 10
MEDIUM_RISK_COUNT = 3
DEFAULT_TOP_LIMIT = 20


class StatisticsCalculator:
    """Builds ScanStatistics from a flat list of detections."""

    @classmethod
    def calculate(
        cls,
        detections: Sequence[Detection],
        total_files_scanned: int,
        top_limit: int = DEFAULT_TOP_LIMIT,
        now: Optional[datetime] = None,
    ) -> ScanStatistics:
        """
        Aggregate detections into scan statistics.

        Args:
            detections: All detections of a scan
            total_files_scanned: Number of files the scanner attempted
            top_limit: Size of the top risky files ranking
            now: Reference time for staleness classification

        Returns:
            ScanStatistics
        """
        by_file: Dict[str, List[Detection]] = {}
        for detection in detections:
            by_file.setdefault(detection.file_path, []).append(detection)

        type_counts = Counter(d.pii_type.value for d in detections)

        files = [cls._file_risk(path, group, now) for path, group in by_file.items()]
        files.sort(key=lambda f: (-f.pii_count, f.file_path))

        stats = ScanStatistics(
            total_files_scanned=total_files_scanned,
            files_with_pii=len(by_file),
            total_pii_found=len(detections),
            pii_by_type=dict(type_counts.most_common()),
            top_risky_files=files[:top_limit],
        )

        logger.debug(
            f"Statistics: {stats.total_pii_found} PII in {stats.files_with_pii}"
            f"/{stats.total_files_scanned} files"
        )
        return stats

    @classmethod
    def _file_risk(
        cls, file_path: str, group: List[Detection], now: Optional[datetime]
    ) -> FileRiskInfo:
        # File-level metadata is identical on every detection of a file
        first = group[0]
        pii_count = len(group)

        exposure_level = first.exposure_level or ExposureLevel.FAIBLE
        permission_info = PermissionInfo(
            principal_count=first.user_group_count or 0,
            accessible_to_everyone=bool(first.accessible_to_everyone),
            accessible_to_authenticated_users=bool(first.accessible_to_authenticated_users),
            is_network_share=bool(first.is_network_share),
        )

        staleness = StalenessAnalyzer.classify(first.last_accessed_at, now)

        return FileRiskInfo(
            file_path=file_path,
            pii_count=pii_count,
            distinct_type_count=len({d.pii_type for d in group}),
            risk_level=cls.calculate_risk_level(pii_count, (d.pii_type for d in group)),
            last_accessed_at=first.last_accessed_at,
            staleness_level=staleness.level,
            stale_data_warning=StalenessAnalyzer.get_stale_data_message(
                pii_count, first.last_accessed_at, now
            ),
            exposure_level=exposure_level,
            accessible_to_everyone=permission_info.accessible_to_everyone,
            is_network_share=permission_info.is_network_share,
            user_group_count=permission_info.principal_count,
            exposure_warning=ExposureAnalyzer.get_exposure_warning(
                pii_count, permission_info, exposure_level
            ),
        )

    @staticmethod
    def calculate_risk_level(pii_count: int, pii_types: Iterable[PIIType]) -> RiskLevel:
        """Banking data or more than ten PII is high risk; three or more is medium."""
        if any(t in BANKING_PII_TYPES for t in pii_types) or pii_count > HIGH_RISK_COUNT:
            return RiskLevel.ELEVE
        if pii_count >= MEDIUM_RISK_COUNT:
            return RiskLevel.MOYEN
        return RiskLevel.FAIBLE
