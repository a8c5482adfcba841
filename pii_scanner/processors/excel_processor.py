"""Excel spreadsheet text extraction."""

from pathlib import Path
from typing import List

import openpyxl

from pii_scanner.utils import get_logger

logger = get_logger(__name__)


class ExcelProcessor:
    """Extract cell text from Excel workbooks."""

    def extract_sheets(self, file_path: str) -> List[str]:
        """
        Extract the text of every non-empty sheet.

        Cells of a row are joined with tabs, rows with newlines.

        Args:
            file_path: Path to .xlsx file

        Returns:
            One text block per sheet holding data
        """
        workbook = openpyxl.load_workbook(file_path, read_only=True, data_only=True)

        try:
            sheets = []
            for sheet in workbook.worksheets:
                rows = []
                for row in sheet.iter_rows(values_only=True):
                    values = [str(value).strip() for value in row if value is not None]
                    values = [value for value in values if value]
                    if values:
                        rows.append("\t".join(values))

                if rows:
                    sheets.append("\n".join(rows))
        finally:
            workbook.close()

        logger.debug(f"Extracted {len(sheets)} sheets from {Path(file_path).name}")
        return sheets

    def extract(self, file_path: str) -> str:
        return "\n".join(self.extract_sheets(file_path))
