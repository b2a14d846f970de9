"""
HTML to PDF Rendering Module

Prints an HTML document to PDF with headless Chromium driven by Playwright.
"""

import os
import time
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from dotenv import load_dotenv
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from folio.contexts.rendering.exceptions import (
    ContentRenderError,
    EngineLaunchError,
    MissingInputError,
    RenderError,
    RenderTimeoutError,
)
from folio.contexts.rendering.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_render_result,
    log_render_start,
    log_validation_result,
    setup_rendering_logger,
)
from folio.contexts.rendering.page_options import PageOptions
from folio.contexts.rendering.validator import ValidationResult, validate_pdf
from folio.utils.event_logging import log_pipeline_event
from folio.utils.pdf_processing import page_count
from folio.utils.timestamp import now

load_dotenv()

RESUME_HTML_PATH = Path(os.getenv("RESUME_HTML_PATH", "web/templates/pages/resume.html"))
RESUME_PDF_PATH = Path(os.getenv("RESUME_PDF_PATH", "web/static/resume.pdf"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
DEFAULT_TIMEOUT_MS = 30000.0


def _timeout_from_env(raw: Optional[str], default: float = DEFAULT_TIMEOUT_MS) -> float:
    """Parse RENDER_TIMEOUT_MS, falling back to the default on a malformed or non-positive value."""
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        _log_warning(f"Ignoring RENDER_TIMEOUT_MS={raw!r}: not a number, using {default:.0f} ms")
        return default
    if value <= 0:
        _log_warning(f"Ignoring RENDER_TIMEOUT_MS={raw!r}: must be positive, using {default:.0f} ms")
        return default
    return value


RENDER_TIMEOUT_MS = _timeout_from_env(os.getenv("RENDER_TIMEOUT_MS"))

# Chromium's setuid sandbox is unavailable in most containers and CI runners
BROWSER_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

# "content": inject the HTML text into a blank page
# "file": navigate to the file URI so relative stylesheets and images resolve
LOAD_MODES = ("content", "file")


@dataclass
class RenderResult:
    """
    Result of rendering a document to PDF.

    Attributes:
        success: Whether a PDF was produced
        pdf_path: Path to generated PDF (None if failed)
        size_bytes: Size of the generated PDF (diagnostic only)
        page_count: Number of pages in generated PDF (None if not available)
        elapsed_s: Wall time spent rendering
        errors: Error messages (empty on success)
        error_kind: Exception class name of the failure (None on success)
        log_dir: Directory holding render.log for this run
        validation: Post-render checks of the PDF (None if not run)
    """

    success: bool
    pdf_path: Optional[Path] = None
    size_bytes: Optional[int] = None
    page_count: Optional[int] = None
    elapsed_s: float = 0.0
    errors: List[str] = field(default_factory=list)
    error_kind: Optional[str] = None
    log_dir: Optional[Path] = None
    validation: Optional[ValidationResult] = None


@contextmanager
def render_session(
    engine: Callable = sync_playwright, timeout_ms: float = RENDER_TIMEOUT_MS
) -> Iterator[Page]:
    """
    Open a single-use browser page, closing the browser and driver on exit.

    The browser is closed on every exit path, including exceptions raised by
    the caller inside the with block.

    Args:
        engine: Playwright entry point (replaced with a fake in tests)
        timeout_ms: Default timeout for page operations

    Yields:
        A blank Playwright page

    Raises:
        EngineLaunchError: If the driver or browser cannot be started
    """
    with ExitStack() as stack:
        try:
            playwright = stack.enter_context(engine())
            browser = playwright.chromium.launch(headless=True, args=BROWSER_ARGS)
        except PlaywrightError as e:
            raise EngineLaunchError("Browser failed to launch", original_error=e) from e

        stack.callback(_close_browser, browser)
        _log_debug("Browser launched.")

        page = browser.new_page()
        page.set_default_timeout(timeout_ms)
        yield page


def _close_browser(browser) -> None:
    browser.close()
    _log_debug("Browser closed.")


def render_html(
    input_path: Path,
    output_path: Path,
    page_options: Optional[PageOptions] = None,
    timeout_ms: float = RENDER_TIMEOUT_MS,
    load_mode: str = "content",
    engine: Callable = sync_playwright,
) -> RenderResult:
    """
    Render an HTML document to a PDF file.

    Pure rendering function - no logging setup or event tracking. The output
    file is overwritten if it exists; its parent directory is created.

    Args:
        input_path: HTML document to render (must exist)
        output_path: Where to write the PDF
        page_options: Paper size, margins and background handling (default: PageOptions())
        timeout_ms: Upper bound on waiting for the document to reach network-idle
        load_mode: "content" to inject the HTML text, "file" to open the file URI
        engine: Playwright entry point (replaced with a fake in tests)

    Returns:
        RenderResult with success=True and PDF diagnostics

    Raises:
        MissingInputError: If input_path does not exist (nothing else is touched)
        EngineLaunchError: If the browser cannot be started
        RenderTimeoutError: If loading does not settle within timeout_ms
        ContentRenderError: If the output directory cannot be created, or loading
            or printing fails for any other reason
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    if load_mode not in LOAD_MODES:
        raise ValueError(f"load_mode must be one of {', '.join(LOAD_MODES)}, got: {load_mode}")

    if not input_path.is_file():
        raise MissingInputError(f"Input document not found: {input_path}", input_path=input_path)

    if page_options is None:
        page_options = PageOptions()

    html = None
    if load_mode == "content":
        # Undecodable bytes become U+FFFD rather than failing the render
        try:
            html = input_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ContentRenderError(
                f"Could not read input document: {input_path}", input_path=input_path, original_error=e
            ) from e

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ContentRenderError(
            f"Could not create output directory: {output_path.parent}",
            input_path=input_path,
            original_error=e,
        ) from e

    start_time = time.time()

    try:
        with render_session(engine=engine, timeout_ms=timeout_ms) as page:
            _log_info("Loading document...")
            if load_mode == "file":
                page.goto(input_path.resolve().as_uri(), wait_until="networkidle", timeout=timeout_ms)
            else:
                page.set_content(html, wait_until="networkidle", timeout=timeout_ms)

            _log_info("Printing to PDF...")
            page.pdf(path=str(output_path), **page_options.to_pdf_kwargs())
    except PlaywrightTimeoutError as e:
        raise RenderTimeoutError(
            f"Document did not settle within {timeout_ms:.0f} ms: {input_path}",
            timeout_ms=timeout_ms,
            input_path=input_path,
            original_error=e,
        ) from e
    except PlaywrightError as e:
        raise ContentRenderError(
            f"Browser failed to render {input_path}", input_path=input_path, original_error=e
        ) from e
    except OSError as e:
        raise ContentRenderError(
            f"Could not write PDF: {output_path}", input_path=input_path, original_error=e
        ) from e

    elapsed_s = time.time() - start_time

    if not output_path.exists():
        raise ContentRenderError("PDF file was not generated", input_path=input_path)

    return RenderResult(
        success=True,
        pdf_path=output_path,
        size_bytes=output_path.stat().st_size,
        page_count=page_count(output_path),
        elapsed_s=elapsed_s,
    )


def render_resume(
    input_path: Path = RESUME_HTML_PATH,
    output_path: Path = RESUME_PDF_PATH,
    page_options: Optional[PageOptions] = None,
    timeout_ms: float = RENDER_TIMEOUT_MS,
    load_mode: str = "content",
    max_pages: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
    logs_path: Path = LOGS_PATH,
    events_file: Optional[Path] = None,
    engine: Callable = sync_playwright,
) -> RenderResult:
    """
    Render the résumé with logging, event tracking and output validation.

    Orchestration function that wraps render_html() the way the rest of the
    pipeline expects:
        - Creates outs/logs/render_<timestamp>/ with a detailed render.log (Tier 1)
        - Appends render_started / render_completed / render_failed to the
          pipeline event log (Tier 2)
        - Converts every RenderError into a failed RenderResult
        - Validates the PDF on success (signature, size, optional page limit)

    Args:
        input_path: HTML document to render (default: RESUME_HTML_PATH env)
        output_path: Where to write the PDF (default: RESUME_PDF_PATH env)
        page_options: Paper size, margins and background handling (default: PageOptions())
        timeout_ms: Upper bound on waiting for network-idle (default: RENDER_TIMEOUT_MS env)
        load_mode: "content" or "file" (see LOAD_MODES)
        max_pages: Warn when the PDF has more pages than this (default: None)
        verbose: Log every error and validation issue (default: False)
        quiet: Write render.log only, nothing to stdout (default: False)
        logs_path: Root directory for per-run log directories (default: LOGS_PATH env)
        events_file: Pipeline event log (default: PIPELINE_EVENTS_FILE env)
        engine: Playwright entry point (replaced with a fake in tests)

    Returns:
        RenderResult; success=False carries errors and error_kind instead of raising
    """
    input_path = Path(input_path).resolve()
    output_path = Path(output_path).resolve()
    document_name = input_path.stem

    if page_options is None:
        page_options = PageOptions()

    log_dir = Path(logs_path) / f"render_{now()}"
    setup_rendering_logger(log_dir, console=not quiet)

    log_render_start(document_name, input_path, output_path, page_options, timeout_ms)
    log_pipeline_event(
        event_type="render_started",
        document_name=document_name,
        source="rendering",
        events_file=events_file,
        input_path=str(input_path),
        output_path=str(output_path),
        page_format=page_options.page_format,
    )

    start_time = time.time()
    try:
        result = render_html(
            input_path=input_path,
            output_path=output_path,
            page_options=page_options,
            timeout_ms=timeout_ms,
            load_mode=load_mode,
            engine=engine,
        )
    except RenderError as e:
        result = RenderResult(
            success=False,
            errors=[str(e)],
            error_kind=type(e).__name__,
            elapsed_s=time.time() - start_time,
        )

    result.log_dir = log_dir
    log_render_result(document_name, result, verbose=verbose)

    if result.success:
        result.validation = validate_pdf(result.pdf_path, max_pages=max_pages)
        log_validation_result(result.pdf_path, result.validation, verbose=verbose)

        log_pipeline_event(
            event_type="render_completed",
            document_name=document_name,
            source="rendering",
            events_file=events_file,
            render_time_s=round(result.elapsed_s, 2),
            size_bytes=result.size_bytes,
            page_count=result.page_count,
            pdf_path=str(result.pdf_path),
            validation_issues=result.validation.issues,
        )
    else:
        log_pipeline_event(
            event_type="render_failed",
            document_name=document_name,
            source="rendering",
            events_file=events_file,
            render_time_s=round(result.elapsed_s, 2),
            error_kind=result.error_kind,
            errors=result.errors[:5],
        )

    return result
