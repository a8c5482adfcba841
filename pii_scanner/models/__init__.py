"""Data models for the PII scanner."""

from .detection import (
    PIIType,
    BANKING_PII_TYPES,
    ExposureLevel,
    StalenessLevel,
    RiskLevel,
    PermissionInfo,
    Detection,
    FileRiskInfo,
    ScanStatistics,
)
from .session import ScanStatus, ScanSession, ScanProgress, ScanResults
from .schedule import ScanFrequency, ScheduledScan, RecurrenceRule
from .config import Settings, get_settings, reset_settings, normalize_extensions

__all__ = [
    "PIIType",
    "BANKING_PII_TYPES",
    "ExposureLevel",
    "StalenessLevel",
    "RiskLevel",
    "PermissionInfo",
    "Detection",
    "FileRiskInfo",
    "ScanStatistics",
    "ScanStatus",
    "ScanSession",
    "ScanProgress",
    "ScanResults",
    "ScanFrequency",
    "ScheduledScan",
    "RecurrenceRule",
    "Settings",
    "get_settings",
    "reset_settings",
    "normalize_extensions",
]
