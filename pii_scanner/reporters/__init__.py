"""Report generation modules."""

from .csv_reporter import CSVReporter, ExcelReporter
from .json_reporter import JSONReporter

__all__ = ["CSVReporter", "ExcelReporter", "JSONReporter"]
