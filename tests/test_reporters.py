"""Tests for report generation."""

import csv
import json
import pytest
import openpyxl
from datetime import datetime, timezone
from pathlib import Path

from pii_scanner.analyzers import StatisticsCalculator
from pii_scanner.models import Detection, ExposureLevel, PIIType, ScanStatistics
from pii_scanner.reporters import CSVReporter, ExcelReporter, JSONReporter


@pytest.fixture
def sample_detections():
    """Detections for two files, one stale and world readable."""
    old = datetime(2019, 5, 2, tzinfo=timezone.utc)
    shared = dict(last_accessed_at=old, exposure_level=ExposureLevel.CRITIQUE, accessible_to_everyone=True)

    return [
        Detection(pii_type=PIIType.IBAN, matched_text="BJ66BJ0610100100144390000769", file_path="/data/paie.csv", **shared),
        Detection(pii_type=PIIType.EMAIL, matched_text="awa@example.bj", file_path="/data/paie.csv", **shared),
        Detection(pii_type=PIIType.EMAIL, matched_text="jean@example.bj", file_path="/data/contacts.txt"),
    ]


@pytest.fixture
def sample_statistics(sample_detections) -> ScanStatistics:
    return StatisticsCalculator.calculate(sample_detections, total_files_scanned=4)


class TestCSVReporter:
    """Test CSV export functionality."""

    @pytest.fixture
    def reporter(self):
        return CSVReporter()

    def test_export(self, reporter: CSVReporter, sample_detections, sample_statistics, temp_dir: Path):
        output_path = temp_dir / "rapport.csv"

        reporter.export(sample_detections, sample_statistics, str(output_path))

        content = output_path.read_text(encoding="utf-8")
        assert "# Fichiers scannés: 4" in content
        assert "# Total PII détectées: 3" in content
        assert "Email: 2 (66.7%)" in content
        assert "/data/paie.csv;IBAN;BJ66BJ0610100100144390000769" in content

    def test_risky_files_table(self, reporter: CSVReporter, sample_detections, sample_statistics, temp_dir: Path):
        output_path = temp_dir / "rapport.csv"
        reporter.export(sample_detections, sample_statistics, str(output_path))

        lines = output_path.read_text(encoding="utf-8").splitlines()
        start = lines.index("# === FICHIERS À RISQUE (DÉTAILS COMPLETS) ===") + 1
        rows = list(csv.DictReader(lines[start:start + 3], delimiter=";"))

        assert rows[0]["Fichier"] == "paie.csv"
        assert rows[0]["Niveau de risque"] == "ÉLEVÉ"
        assert rows[0]["Everyone"] == "OUI"
        assert rows[0]["Exposition"] == "Critique"
        assert rows[1]["Fichier"] == "contacts.txt"
        assert rows[1]["Everyone"] == "NON"

    def test_export_without_detections(self, reporter: CSVReporter, temp_dir: Path):
        output_path = temp_dir / "empty.csv"

        reporter.export([], StatisticsCalculator.calculate([], 2), str(output_path))

        content = output_path.read_text(encoding="utf-8")
        assert "# Total PII détectées: 0" in content
        assert "Fichier;Type;Valeur" in content


class TestJSONReporter:
    """Test JSON export functionality."""

    def test_export(self, sample_detections, sample_statistics, temp_dir: Path):
        output_path = temp_dir / "rapport.json"

        JSONReporter().export(sample_detections, sample_statistics, str(output_path))

        report = json.loads(output_path.read_text(encoding="utf-8"))
        assert report["metadata"]["totalFilesScanned"] == 4
        assert report["metadata"]["filesWithPii"] == 2
        assert report["statistics"]["piiByType"][0] == {"type": "Email", "count": 2, "percentage": 66.7}

        top = report["statistics"]["topRiskyFiles"][0]
        assert top["fileName"] == "paie.csv"
        assert top["riskLevel"] == "ÉLEVÉ"
        assert top["stalenessLevel"] == "+5 ans"
        assert top["lastAccessedDate"].startswith("2019-05-02")

        assert {"filePath": "/data/contacts.txt", "fileName": "contacts.txt", "piiType": "Email", "match": "jean@example.bj"} in report["detections"]

    def test_non_ascii_kept(self, sample_detections, sample_statistics, temp_dir: Path):
        output_path = temp_dir / "rapport.json"
        JSONReporter().export(sample_detections, sample_statistics, str(output_path))

        assert "ÉLEVÉ" in output_path.read_text(encoding="utf-8")


class TestExcelReporter:
    """Test Excel export functionality."""

    def test_export(self, sample_detections, sample_statistics, temp_dir: Path):
        output_path = temp_dir / "rapport.xlsx"

        ExcelReporter().export(sample_detections, sample_statistics, str(output_path))

        wb = openpyxl.load_workbook(output_path)
        assert wb.sheetnames == ["Statistiques", "Fichiers à risque", "Détections"]

        detections = wb["Détections"]
        assert detections.cell(1, 1).value == "Fichier"
        assert detections.max_row == 4

        risky = wb["Fichiers à risque"]
        assert risky.cell(2, 2).value == "paie.csv"
        wb.close()
