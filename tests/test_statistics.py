"""Tests for the statistics and risk aggregator."""

import pytest
from datetime import datetime, timezone

from pii_scanner.analyzers import StatisticsCalculator
from pii_scanner.models import (
    Detection,
    ExposureLevel,
    PIIType,
    RiskLevel,
    StalenessLevel,
)

NOW = datetime(2026, 10, 17, tzinfo=timezone.utc)


def make_detections(file_path: str, pii_type: PIIType, count: int, **metadata):
    return [
        Detection(pii_type=pii_type, matched_text=f"value-{i}", file_path=file_path, **metadata)
        for i in range(count)
    ]


class TestStatisticsCalculator:
    """Test grouping, risk assignment and ranking."""

    def test_empty(self):
        stats = StatisticsCalculator.calculate([], total_files_scanned=5)

        assert stats.total_files_scanned == 5
        assert stats.files_with_pii == 0
        assert stats.total_pii_found == 0
        assert stats.pii_by_type == {}
        assert stats.top_risky_files == []

    def test_counts_and_type_order(self):
        detections = (
            make_detections("a.txt", PIIType.EMAIL, 2)
            + make_detections("b.txt", PIIType.PHONE_NUMBER, 5)
            + make_detections("b.txt", PIIType.EMAIL, 1)
        )

        stats = StatisticsCalculator.calculate(detections, total_files_scanned=10)

        assert stats.files_with_pii == 2
        assert stats.total_pii_found == 8
        assert list(stats.pii_by_type.items()) == [("Telephone", 5), ("Email", 3)]

    @pytest.mark.parametrize(
        "pii_type, count, expected",
        [
            (PIIType.EMAIL, 1, RiskLevel.FAIBLE),
            (PIIType.EMAIL, 2, RiskLevel.FAIBLE),
            (PIIType.EMAIL, 3, RiskLevel.MOYEN),
            (PIIType.EMAIL, 10, RiskLevel.MOYEN),
            (PIIType.EMAIL, 11, RiskLevel.ELEVE),
            (PIIType.IBAN, 1, RiskLevel.ELEVE),
            (PIIType.CREDIT_CARD, 1, RiskLevel.ELEVE),
        ],
    )
    def test_risk_levels(self, pii_type: PIIType, count: int, expected: RiskLevel):
        stats = StatisticsCalculator.calculate(make_detections("f.txt", pii_type, count), 1)
        assert stats.top_risky_files[0].risk_level == expected

    def test_distinct_type_count(self):
        detections = make_detections("f.txt", PIIType.EMAIL, 2) + make_detections(
            "f.txt", PIIType.NPI, 1
        )
        stats = StatisticsCalculator.calculate(detections, 1)

        assert stats.top_risky_files[0].pii_count == 3
        assert stats.top_risky_files[0].distinct_type_count == 2

    def test_ranking_by_count_then_path(self):
        detections = (
            make_detections("b.txt", PIIType.EMAIL, 2)
            + make_detections("a.txt", PIIType.EMAIL, 2)
            + make_detections("c.txt", PIIType.EMAIL, 5)
        )

        stats = StatisticsCalculator.calculate(detections, 3)

        assert [f.file_path for f in stats.top_risky_files] == ["c.txt", "a.txt", "b.txt"]

    def test_top_limit(self):
        detections = []
        for i in range(25):
            detections += make_detections(f"file{i:02d}.txt", PIIType.EMAIL, 1)

        assert len(StatisticsCalculator.calculate(detections, 25).top_risky_files) == 20
        assert len(StatisticsCalculator.calculate(detections, 25, top_limit=5).top_risky_files) == 5

    def test_file_metadata_from_first_detection(self):
        old = datetime(2019, 1, 1, tzinfo=timezone.utc)
        detections = make_detections(
            "shared.txt",
            PIIType.EMAIL,
            4,
            last_accessed_at=old,
            exposure_level=ExposureLevel.CRITIQUE,
            accessible_to_everyone=True,
            user_group_count=3,
        )

        info = StatisticsCalculator.calculate(detections, 1, now=NOW).top_risky_files[0]

        assert info.last_accessed_at == old
        assert info.staleness_level == StalenessLevel.FIVE_YEARS_PLUS
        assert "4 PII" in info.stale_data_warning
        assert info.exposure_level == ExposureLevel.CRITIQUE
        assert info.accessible_to_everyone is True
        assert info.user_group_count == 3
        assert "Everyone" in info.exposure_warning

    def test_defaults_without_metadata(self):
        info = StatisticsCalculator.calculate(make_detections("f.txt", PIIType.EMAIL, 1), 1).top_risky_files[0]

        assert info.staleness_level == StalenessLevel.RECENT
        assert info.stale_data_warning is None
        assert info.exposure_level == ExposureLevel.FAIBLE
        assert info.exposure_warning is None

    def test_summary(self):
        detections = make_detections("a.txt", PIIType.EMAIL, 3) + make_detections(
            "a.txt", PIIType.NPI, 1
        )
        summary = StatisticsCalculator.calculate(detections, 2).summary()

        assert "Total de PII détectées : 4" in summary
        assert "Email: 3 (75.0%)" in summary
