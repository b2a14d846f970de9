"""
Rendering Context

Responsibilities:
- Renders HTML documents to PDF with a headless browser
- Resolves page options (paper size, margins, backgrounds) from presets
- Validates rendered PDFs (signature, size, page count, content)

Owns: browser sessions, PDF generation, output validation
Never: Modifies the HTML it renders
"""

from folio.contexts.rendering.exceptions import (
    ContentRenderError,
    EngineLaunchError,
    MissingInputError,
    RenderEngineFailure,
    RenderError,
    RenderTimeoutError,
)
from folio.contexts.rendering.page_options import Margins, PageOptions, resolve_page_options
from folio.contexts.rendering.renderer import RenderResult, render_html, render_resume
from folio.contexts.rendering.validator import ValidationResult, validate_pdf

__all__ = [
    "ContentRenderError",
    "EngineLaunchError",
    "Margins",
    "MissingInputError",
    "PageOptions",
    "RenderEngineFailure",
    "RenderError",
    "RenderResult",
    "RenderTimeoutError",
    "ValidationResult",
    "render_html",
    "render_resume",
    "resolve_page_options",
    "validate_pdf",
]
