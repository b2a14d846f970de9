"""
Rendered PDF validation.

Checks a rendered file the way a reader of the published résumé would notice
problems: it must open as a PDF, stay within a sane size, fit the expected
number of pages, and actually contain the text it was rendered from.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from folio.utils.pdf_processing import (
    extract_text,
    has_pdf_signature,
    normalize_for_matching,
    page_count,
)

# Sanity ceiling for a rendered résumé
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


@dataclass
class ValidationResult:
    """
    Result of PDF validation.

    Attributes:
        is_valid: Whether the PDF passes all checks
        pdf_path: File that was checked
        page_count: Number of pages (None if unreadable)
        size_bytes: File size (None if missing)
        issues: Human-readable description of each failed check
    """

    is_valid: bool
    pdf_path: Path
    page_count: Optional[int] = None
    size_bytes: Optional[int] = None
    issues: List[str] = field(default_factory=list)


def validate_pdf(
    pdf_path: Path,
    max_pages: Optional[int] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    expected_text: Optional[str] = None,
) -> ValidationResult:
    """
    Validate a rendered PDF.

    Args:
        pdf_path: PDF file to check
        max_pages: Maximum allowed page count (default: None, no limit)
        max_bytes: Maximum allowed file size (default: 10 MiB)
        expected_text: Text that must appear in the document, compared ignoring
            case, whitespace and punctuation (default: None, not checked)

    Returns:
        ValidationResult listing every failed check
    """
    pdf_path = Path(pdf_path)

    if not pdf_path.exists():
        return ValidationResult(is_valid=False, pdf_path=pdf_path, issues=[f"PDF not found: {pdf_path}"])

    size_bytes = pdf_path.stat().st_size
    if size_bytes == 0:
        return ValidationResult(
            is_valid=False, pdf_path=pdf_path, size_bytes=0, issues=["PDF file is empty"]
        )

    issues = []

    if not has_pdf_signature(pdf_path):
        issues.append("File does not start with the %PDF- signature")

    if size_bytes > max_bytes:
        issues.append(f"PDF is {size_bytes} bytes, over the {max_bytes} byte limit")

    pages = page_count(pdf_path)
    if pages is None:
        issues.append("PDF could not be read")
    elif max_pages is not None and pages > max_pages:
        issues.append(f"PDF has {pages} pages, expected at most {max_pages}")

    if expected_text and pages is not None:
        try:
            text = extract_text(pdf_path)
        except Exception as e:
            issues.append(f"Text extraction failed: {e}")
        else:
            if normalize_for_matching(expected_text) not in normalize_for_matching(text):
                issues.append(f"Expected text not found: {expected_text!r}")

    return ValidationResult(
        is_valid=not issues,
        pdf_path=pdf_path,
        page_count=pages,
        size_bytes=size_bytes,
        issues=issues,
    )
