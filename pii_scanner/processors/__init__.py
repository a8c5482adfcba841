"""Document text extractors."""

from .document_processor import TextExtractor
from .excel_processor import ExcelProcessor

__all__ = ["TextExtractor", "ExcelProcessor"]
