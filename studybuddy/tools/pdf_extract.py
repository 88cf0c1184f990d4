"""Extract page text from PDFs using PyMuPDF with pdfplumber fallback."""
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def extract_pdf_pages(file_path: Path) -> tuple[Optional[list[str]], Optional[str]]:
    """
    Extract the text of every page of a PDF.

    Uses PyMuPDF (fitz) as primary method, falls back to pdfplumber if needed.

    Returns:
        (pages, error_message)
        If successful: (list of page texts, None)
        If failed: (None, error_message)
    """
    pages = _extract_with_pymupdf(file_path)
    if pages is not None:
        return pages, None

    pages = _extract_with_pdfplumber(file_path)
    if pages is not None:
        return pages, None

    return None, "Failed to extract text with both PyMuPDF and pdfplumber"


def _extract_with_pymupdf(file_path: Path) -> Optional[list[str]]:
    """Extract text using PyMuPDF (fitz). Returns None on failure."""
    try:
        import fitz

        with fitz.open(file_path) as doc:
            return [page.get_text() for page in doc]
    except Exception as e:
        logger.warning("PyMuPDF could not read %s: %s", file_path, e)
        return None


def _extract_with_pdfplumber(file_path: Path) -> Optional[list[str]]:
    """Extract text using pdfplumber. Returns None on failure."""
    try:
        import pdfplumber

        with pdfplumber.open(file_path) as pdf:
            return [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        logger.warning("pdfplumber could not read %s: %s", file_path, e)
        return None
