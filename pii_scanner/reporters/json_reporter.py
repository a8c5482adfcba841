"""JSON export for scan results."""

import json
import os
from datetime import datetime
from typing import List

from pii_scanner.models import Detection, ScanStatistics
from pii_scanner.utils import get_logger

logger = get_logger(__name__)

REPORT_VERSION = "1.0"


class JSONReporter:
    """Export scan results to JSON."""

    def build(self, detections: List[Detection], statistics: ScanStatistics) -> dict:
        """Build the report document as plain Python data."""
        total = statistics.total_pii_found

        return {
            "metadata": {
                "scanDate": datetime.now().isoformat(),
                "version": REPORT_VERSION,
                "totalFilesScanned": statistics.total_files_scanned,
                "filesWithPii": statistics.files_with_pii,
                "totalPiiFound": total,
            },
            "statistics": {
                "piiByType": [
                    {
                        "type": pii_type,
                        "count": count,
                        "percentage": round(count * 100.0 / total, 1),
                    }
                    for pii_type, count in statistics.pii_by_type.items()
                ],
                "topRiskyFiles": [
                    {
                        "filePath": f.file_path,
                        "fileName": os.path.basename(f.file_path),
                        "piiCount": f.pii_count,
                        "riskLevel": f.risk_level.value,
                        "lastAccessedDate": f.last_accessed_at.isoformat() if f.last_accessed_at else None,
                        "stalenessLevel": f.staleness_level.value,
                        "staleDataWarning": f.stale_data_warning,
                        "exposureLevel": f.exposure_level.value,
                        "accessibleToEveryone": f.accessible_to_everyone,
                        "isNetworkShare": f.is_network_share,
                        "userGroupCount": f.user_group_count,
                        "exposureWarning": f.exposure_warning,
                    }
                    for f in statistics.top_risky_files
                ],
            },
            "detections": [
                {
                    "filePath": d.file_path,
                    "fileName": os.path.basename(d.file_path),
                    "piiType": d.pii_type.value,
                    "match": d.matched_text,
                }
                for d in detections
            ],
        }

    def export(
        self, detections: List[Detection], statistics: ScanStatistics, output_path: str
    ) -> None:
        """
        Export scan results to a JSON file.

        Args:
            detections: All detections of the scan
            statistics: Statistics computed from ``detections``
            output_path: Output JSON file path
        """
        try:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(self.build(detections, statistics), f, indent=2, ensure_ascii=False)

            logger.info(f"JSON export complete: {output_path}")

        except Exception as e:
            logger.error(f"JSON export failed: {e}")
            raise
