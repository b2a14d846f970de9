"""
PDF inspection utilities for rendered documents.

Helper functions:
    has_pdf_signature: Check the file header for the %PDF- magic bytes.
    page_count: Quick page count without full extraction.
    extract_text: Plain text of every page, for content checks.
    normalize_for_matching: Text normalization for fuzzy matching.
"""

from pathlib import Path
from typing import Optional

import pdfplumber
from PyPDF2 import PdfReader

PDF_SIGNATURE = b"%PDF-"


def has_pdf_signature(pdf_path: Path) -> bool:
    """Return True if the file starts with the PDF header signature."""
    try:
        with open(pdf_path, "rb") as f:
            return f.read(len(PDF_SIGNATURE)) == PDF_SIGNATURE
    except OSError:
        return False


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def extract_text(pdf_path: Path) -> str:
    """
    Extract the text of every page, pages separated by newlines.

    Raises whatever pdfplumber raises for unreadable files; callers decide
    whether that is fatal.
    """
    with pdfplumber.open(pdf_path) as pdf:
        return "\n".join(page.extract_text() or "" for page in pdf.pages)


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())
