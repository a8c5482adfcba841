"""Staleness classification from a file's last access time."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from pii_scanner.models import StalenessLevel
from pii_scanner.models.timeutils import add_months, ensure_utc, utcnow


class StalenessAssessment(BaseModel):
    """Staleness bucket of one file."""

    level: StalenessLevel
    label: str


class StalenessAnalyzer:
    """Buckets files by how long ago they were last accessed."""

    # (months back, level) from oldest to most recent
    THRESHOLDS = [
        (60, StalenessLevel.FIVE_YEARS_PLUS),
        (36, StalenessLevel.THREE_YEARS),
        (12, StalenessLevel.ONE_YEAR),
        (6, StalenessLevel.SIX_MONTHS),
    ]

    # Buckets for which a warning is produced
    WARNING_FROM = StalenessLevel.ONE_YEAR

    @classmethod
    def get_staleness_level(
        cls, last_accessed_at: Optional[datetime], now: Optional[datetime] = None
    ) -> StalenessLevel:
        """
        Classify a last access time.

        Args:
            last_accessed_at: Last access time; naive values are treated as UTC
            now: Reference time (defaults to the current UTC time)

        Returns:
            Staleness level; Récent when the access time is unknown
        """
        if last_accessed_at is None:
            return StalenessLevel.RECENT

        accessed = ensure_utc(last_accessed_at)
        now = ensure_utc(now) or utcnow()

        for months, level in cls.THRESHOLDS:
            if accessed <= add_months(now, -months):
                return level

        return StalenessLevel.RECENT

    @classmethod
    def classify(
        cls, last_accessed_at: Optional[datetime], now: Optional[datetime] = None
    ) -> StalenessAssessment:
        level = cls.get_staleness_level(last_accessed_at, now)
        return StalenessAssessment(level=level, label=cls.get_staleness_level_label(level))

    @staticmethod
    def get_staleness_level_label(level: StalenessLevel) -> str:
        return level.value

    @classmethod
    def get_stale_data_message(
        cls,
        pii_count: int,
        last_accessed_at: Optional[datetime],
        now: Optional[datetime] = None,
    ) -> Optional[str]:
        """
        Build a warning for PII kept in a file nobody has opened for a long time.

        Args:
            pii_count: Number of PII found in the file
            last_accessed_at: Last access time of the file
            now: Reference time

        Returns:
            Warning text for files untouched for a year or more, else None
        """
        if pii_count <= 0 or last_accessed_at is None:
            return None

        level = cls.get_staleness_level(last_accessed_at, now)
        if level.rank < cls.WARNING_FROM.rank:
            return None

        accessed = ensure_utc(last_accessed_at)
        if level == StalenessLevel.FIVE_YEARS_PLUS:
            period = "plus de 5 ans"
        else:
            period = f"plus de {level.value}"

        return (
            f"ATTENTION: Ce fichier contient {pii_count} PII et n'a pas été consulté depuis "
            f"{period} (dernier accès : {accessed:%d/%m/%Y}). "
            f"Envisagez l'archivage ou la suppression."
        )
