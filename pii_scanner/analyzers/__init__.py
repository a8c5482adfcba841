"""Scanning and risk analyzers."""

from .exposure_analyzer import ExposureAnalyzer, ExposureAssessment, PermissionInspector
from .staleness_analyzer import StalenessAnalyzer, StalenessAssessment
from .statistics import StatisticsCalculator
from .directory_scanner import DirectoryScanner

__all__ = [
    "ExposureAnalyzer",
    "ExposureAssessment",
    "PermissionInspector",
    "StalenessAnalyzer",
    "StalenessAssessment",
    "StatisticsCalculator",
    "DirectoryScanner",
]
