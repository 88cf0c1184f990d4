"""Load study documents (TXT, Markdown, PDF, DOCX) as plain text."""
import logging
from datetime import datetime, timezone
from pathlib import Path

from docx import Document as DocxDocument

from studybuddy.models.extracted_text import ExtractedText
from studybuddy.tools.pdf_extract import extract_pdf_pages

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".md"}
SUPPORTED_SUFFIXES = TEXT_SUFFIXES | {".pdf", ".docx"}


def extract_text(file_path: Path) -> ExtractedText:
    """
    Extract plain text from a supported document.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: for unsupported file types
        RuntimeError: if a PDF cannot be read by any extractor
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Document not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported file type '{suffix}'. Use one of: {', '.join(sorted(SUPPORTED_SUFFIXES))}"
        )

    if suffix in TEXT_SUFFIXES:
        pages = [file_path.read_text(encoding="utf-8", errors="replace")]
        source_type = "text"
    elif suffix == ".pdf":
        pages, error = extract_pdf_pages(file_path)
        if pages is None:
            raise RuntimeError(f"{file_path.name}: {error}")
        source_type = "pdf"
    else:
        pages = [_extract_docx(file_path)]
        source_type = "docx"

    extracted = ExtractedText(
        path=str(file_path),
        source_type=source_type,
        num_pages=len(pages),
        pages=pages,
        full_text="\n".join(pages),
        extracted_at=datetime.now(timezone.utc).isoformat(),
    )
    logger.info("Extracted %d chars from %s", len(extracted.full_text), file_path.name)
    return extracted


def _extract_docx(file_path: Path) -> str:
    """Join non-empty Word paragraphs with blank lines."""
    doc = DocxDocument(str(file_path))
    return "\n\n".join(p.text for p in doc.paragraphs if p.text.strip())
