"""Pytest configuration and shared fixtures."""

import pytest
import tempfile
from pathlib import Path
from typing import Generator

from pii_scanner.models import Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings(temp_dir: Path) -> Settings:
    """Settings isolated from the environment, writing reports under temp_dir."""
    return Settings(
        _env_file=None,
        max_workers=2,
        reports_root=str(temp_dir / "reports"),
        log_file=None,
    )


@pytest.fixture
def sample_text_with_pii() -> str:
    """Sample text containing one value of most Beninese PII types."""
    return """
    Fiche agent - Direction des Ressources Humaines
    Nom : HOUNKPATIN Jean
    Email : jean.hounkpatin@gouv.bj
    Né le : 15/03/1985
    NPI : 1234567893
    IFU : 3201910123456
    CNSS : 31234567890
    CNI : AB12345678
    RCCM : RB/COT/2019/B/12345
    RAMU : RAMU 12345678
    INE : INE 123456789
    Matricule : F123456
    Carte : 4532015112830366
    IBAN : BJ66BJ0610100100144390000769
    """


@pytest.fixture
def sample_text_no_pii() -> str:
    """Sample text without PII."""
    return """
    Ce document présente le calendrier des formations de l'année.
    Les sessions se tiennent au siège, salle de conférence principale.
    Merci de confirmer votre participation auprès du secrétariat.
    """


@pytest.fixture
def sample_text_file(temp_dir: Path, sample_text_with_pii: str) -> Path:
    """Create a sample text file with PII."""
    txt_path = temp_dir / "sample.txt"
    txt_path.write_text(sample_text_with_pii, encoding="utf-8")
    return txt_path


@pytest.fixture
def sample_pdf_path(temp_dir: Path) -> Path:
    """Create a sample PDF file with an email and a bank card."""
    import fitz

    pdf_path = temp_dir / "sample.pdf"
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Email: awa.sossou@example.bj")
    page.insert_text((72, 100), "Carte: 4532015112830366")
    doc.save(str(pdf_path))
    doc.close()
    return pdf_path


@pytest.fixture
def sample_docx_path(temp_dir: Path) -> Path:
    """Create a sample Word document with PII in a paragraph and a table."""
    from docx import Document

    docx_path = temp_dir / "sample.docx"
    doc = Document()
    doc.add_paragraph("Contact : koffi.agbo@example.bj")
    table = doc.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "IFU"
    table.cell(0, 1).text = "3201910123456"
    doc.save(str(docx_path))
    return docx_path


@pytest.fixture
def sample_xlsx_path(temp_dir: Path) -> Path:
    """Create a sample workbook with PII on two sheets."""
    import openpyxl

    xlsx_path = temp_dir / "sample.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Agents"
    ws.append(["Nom", "NPI"])
    ws.append(["Adjovi", "1234567893"])
    ws2 = wb.create_sheet("Banque")
    ws2.append(["IBAN", "BJ66BJ0610100100144390000769"])
    wb.save(str(xlsx_path))
    wb.close()
    return xlsx_path


@pytest.fixture
def pii_tree(temp_dir: Path) -> Path:
    """
    Directory tree with PII files, an excluded folder and ignored extensions.

    Layout:
        root/clients.txt          email + NPI
        root/rh/paie.csv          IBAN
        root/rh/notes.log         no PII
        root/AppData/cache.txt    email (excluded folder)
        root/setup.exe            email (excluded extension)
        root/image.png            email (not an included extension)
    """
    root = temp_dir / "root"
    (root / "rh").mkdir(parents=True)
    (root / "AppData").mkdir()

    (root / "clients.txt").write_text(
        "Client: marie.zinsou@example.bj\nNPI: 1234567893\n", encoding="utf-8"
    )
    (root / "rh" / "paie.csv").write_text(
        "nom;iban\nTossou;BJ66BJ0610100100144390000769\n", encoding="utf-8"
    )
    (root / "rh" / "notes.log").write_text("Sauvegarde terminée sans erreur\n", encoding="utf-8")
    (root / "AppData" / "cache.txt").write_text("cache@example.bj\n", encoding="utf-8")
    (root / "setup.exe").write_text("installer@example.bj\n", encoding="utf-8")
    (root / "image.png").write_text("logo@example.bj\n", encoding="utf-8")

    return root
