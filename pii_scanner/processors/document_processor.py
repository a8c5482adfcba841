"""Document text extraction."""

from pathlib import Path

import fitz  # PyMuPDF
from docx import Document

from pii_scanner.processors.excel_processor import ExcelProcessor
from pii_scanner.utils import get_logger

logger = get_logger(__name__)


class TextExtractor:
    """Extract plain text from the document formats the scanner supports."""

    TEXT_EXTENSIONS = {".txt", ".csv", ".log", ".json"}
    SUPPORTED_EXTENSIONS = TEXT_EXTENSIONS | {".docx", ".pdf", ".xlsx"}

    def __init__(self):
        self.excel_processor = ExcelProcessor()

    def extract(self, file_path: str) -> str:
        """
        Extract the text content of a document.

        Args:
            file_path: Path to document

        Returns:
            Extracted text (may be empty)

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the extension is not supported
        """
        path = Path(file_path)

        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        extension = path.suffix.lower()

        if extension in self.TEXT_EXTENSIONS:
            return self._extract_text(path)
        elif extension == ".docx":
            return self._extract_docx(path)
        elif extension == ".pdf":
            return self._extract_pdf(path)
        elif extension == ".xlsx":
            return self.excel_processor.extract(str(path))
        else:
            raise ValueError(f"Unsupported file type: {extension}")

    def _extract_text(self, path: Path) -> str:
        """Read a plain text file, falling back to latin-1."""
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.debug(f"{path.name} is not valid UTF-8, reading as latin-1")
            return path.read_text(encoding="latin-1")

    def _extract_docx(self, path: Path) -> str:
        """Extract paragraphs and table cells from a Word document."""
        doc = Document(str(path))

        parts = [para.text for para in doc.paragraphs if para.text.strip()]

        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    if cell.text.strip():
                        parts.append(cell.text)

        return "\n".join(parts)

    def _extract_pdf(self, path: Path) -> str:
        """Extract text page by page from a PDF."""
        pages = []

        with fitz.open(str(path)) as doc:
            for page in doc:
                text = page.get_text()
                if text.strip():
                    pages.append(text)

        logger.debug(f"Extracted text from {len(pages)} pages of {path.name}")
        return "\n".join(pages)
