"""CSV and Excel export for scan results."""

import csv
import os
from datetime import datetime
from typing import List

import openpyxl
from openpyxl.styles import Font, PatternFill

from pii_scanner.models import Detection, ScanStatistics
from pii_scanner.utils import get_logger

logger = get_logger(__name__)

RISKY_FILE_COLUMNS = [
    "Niveau de risque",
    "Fichier",
    "Nombre de PII",
    "Ancienneté",
    "Exposition",
    "Everyone",
    "Réseau",
    "Groupes d'accès",
    "Avertissement ancienneté",
    "Avertissement exposition",
    "Chemin complet",
]

DETECTION_COLUMNS = ["Fichier", "Type", "Valeur"]


def _yes_no(value: bool) -> str:
    return "OUI" if value else "NON"


def _risky_file_rows(statistics: ScanStatistics) -> List[dict]:
    return [
        {
            "Niveau de risque": f.risk_level.value,
            "Fichier": os.path.basename(f.file_path),
            "Nombre de PII": f.pii_count,
            "Ancienneté": f.staleness_level.value,
            "Exposition": f.exposure_level.value,
            "Everyone": _yes_no(f.accessible_to_everyone),
            "Réseau": _yes_no(f.is_network_share),
            "Groupes d'accès": f.user_group_count,
            "Avertissement ancienneté": f.stale_data_warning or "",
            "Avertissement exposition": f.exposure_warning or "",
            "Chemin complet": f.file_path,
        }
        for f in statistics.top_risky_files
    ]


class CSVReporter:
    """Export scan results to a semicolon separated CSV file."""

    DELIMITER = ";"

    def export(
        self, detections: List[Detection], statistics: ScanStatistics, output_path: str
    ) -> None:
        """
        Export statistics, risky files and detections to CSV.

        Summary lines are written as ``#`` comments ahead of the two tables.

        Args:
            detections: All detections of the scan
            statistics: Statistics computed from ``detections``
            output_path: Output CSV file path
        """
        try:
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                self._write_header(f, statistics)

                f.write("# === FICHIERS À RISQUE (DÉTAILS COMPLETS) ===\n")
                writer = csv.DictWriter(f, fieldnames=RISKY_FILE_COLUMNS, delimiter=self.DELIMITER)
                writer.writeheader()
                writer.writerows(_risky_file_rows(statistics))

                f.write("\n# === DÉTAILS DES DÉTECTIONS ===\n")
                writer = csv.DictWriter(f, fieldnames=DETECTION_COLUMNS, delimiter=self.DELIMITER)
                writer.writeheader()
                for detection in detections:
                    writer.writerow(
                        {
                            "Fichier": detection.file_path,
                            "Type": detection.pii_type.value,
                            "Valeur": detection.matched_text,
                        }
                    )

            logger.info(f"CSV export complete: {output_path}")

        except Exception as e:
            logger.error(f"CSV export failed: {e}")
            raise

    def _write_header(self, f, statistics: ScanStatistics) -> None:
        lines = [
            "=== RAPPORT DE SCAN PII ===",
            f"Date: {datetime.now():%Y-%m-%d %H:%M:%S}",
            "",
            f"Fichiers scannés: {statistics.total_files_scanned}",
            f"Fichiers avec PII: {statistics.files_with_pii}",
            f"Total PII détectées: {statistics.total_pii_found}",
            "",
        ]

        if statistics.pii_by_type:
            lines.append("Répartition par type:")
            for pii_type, count in statistics.pii_by_type.items():
                percentage = count * 100.0 / statistics.total_pii_found
                lines.append(f"  - {pii_type}: {count} ({percentage:.1f}%)")
            lines.append("")

        if statistics.top_risky_files:
            lines.append("Top fichiers à risque:")
            for risky in statistics.top_risky_files[:5]:
                lines.append(
                    f"  [{risky.risk_level.value}] {os.path.basename(risky.file_path)} - "
                    f"{risky.pii_count} PII - Ancienneté: {risky.staleness_level.value} - "
                    f"Exposition: {risky.exposure_level.value}"
                )
            lines.append("")

        for line in lines:
            f.write(f"# {line}".rstrip() + "\n")


class ExcelReporter:
    """Export scan results to an Excel workbook."""

    def export(
        self, detections: List[Detection], statistics: ScanStatistics, output_path: str
    ) -> None:
        """
        Export scan results to Excel with one sheet per section.

        Args:
            detections: All detections of the scan
            statistics: Statistics computed from ``detections``
            output_path: Output Excel file path
        """
        try:
            wb = openpyxl.Workbook()

            # Remove default sheet
            wb.remove(wb.active)

            self._create_statistics_sheet(wb.create_sheet("Statistiques"), statistics)
            self._create_table_sheet(
                wb.create_sheet("Fichiers à risque"),
                RISKY_FILE_COLUMNS,
                [list(row.values()) for row in _risky_file_rows(statistics)],
            )
            self._create_table_sheet(
                wb.create_sheet("Détections"),
                DETECTION_COLUMNS,
                [[d.file_path, d.pii_type.value, d.matched_text] for d in detections],
            )

            wb.save(output_path)
            logger.info(f"Excel export complete: {output_path}")

        except Exception as e:
            logger.error(f"Excel export failed: {e}")
            raise

    def _create_statistics_sheet(self, ws, statistics: ScanStatistics) -> None:
        ws["A1"] = "Rapport de scan PII"
        ws["A1"].font = Font(size=16, bold=True)

        row = 3
        info_data = [
            ["Fichiers scannés", statistics.total_files_scanned],
            ["Fichiers avec PII", statistics.files_with_pii],
            ["Total PII détectées", statistics.total_pii_found],
        ]
        for label, value in info_data:
            ws.cell(row, 1, label).font = Font(bold=True)
            ws.cell(row, 2, value)
            row += 1

        row += 1
        ws.cell(row, 1, "Type").font = Font(bold=True)
        ws.cell(row, 2, "Nombre").font = Font(bold=True)
        for pii_type, count in statistics.pii_by_type.items():
            row += 1
            ws.cell(row, 1, pii_type)
            ws.cell(row, 2, count)

    def _create_table_sheet(self, ws, headers: List[str], rows: List[list]) -> None:
        for col, header in enumerate(headers, 1):
            cell = ws.cell(1, col, header)
            cell.fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
            cell.font = Font(bold=True, color="FFFFFF")

        for row_idx, values in enumerate(rows, 2):
            for col, value in enumerate(values, 1):
                ws.cell(row_idx, col, value)
