"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"
BROWSER_ENGINE = "chromium (playwright)"


def setup_rendering_logger(log_dir: Path, console: bool = True) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        console: Also echo to stdout (False for quiet runs; render.log is always written)

    Returns:
        Path to log file

    Example:
        from folio.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir)
        _log_info("Starting render...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Browser engine": BROWSER_ENGINE},
        console=console,
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(
    document_name: str, input_path: Path, output_path: Path, page_options, timeout_ms: float
) -> None:
    """Log start of a render run with its configuration."""
    _log_info(f"Starting render: {document_name}")
    _log_info(f"Output: {output_path}")
    _log_debug(f"  Source: {input_path}")
    _log_debug(f"  Page format: {page_options.page_format}")
    _log_debug(f"  Margins: {page_options.margins}")
    _log_debug(f"  Print background: {page_options.print_background}")
    _log_debug(f"  Use document page size: {page_options.use_document_page_size}")
    _log_debug(f"  Timeout: {timeout_ms:.0f} ms")


def log_render_result(
    document_name: str,
    result,  # RenderResult
    verbose: bool = False,
) -> None:
    """
    Log render result with diagnostics.

    Args:
        document_name: Document identifier
        result: RenderResult from render_html()
        verbose: Show every validation issue instead of the first few (default: False)
    """
    if result.success:
        _log_success("Render succeeded.")
        size_kb = (result.size_bytes or 0) / 1024
        pages = result.page_count if result.page_count is not None else "?"
        _log_success(f"{document_name}: {pages} page(s), {size_kb:.2f} KB ({result.elapsed_s:.2f}s)")
        if result.pdf_path:
            _log_debug(f"  PDF: {result.pdf_path}")
    else:
        _log_error("Render failed.")
        _log_error(f"{document_name}: {result.error_kind} ({result.elapsed_s:.2f}s)")
        error_limit = 10 if verbose else 5
        for i, err in enumerate(result.errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(result.errors) > error_limit:
            _log_error(f"  ... and {len(result.errors) - error_limit} more errors")


def log_validation_result(pdf_path: Path, validation, verbose: bool = False) -> None:
    """Log the outcome of validate_pdf() for a rendered file."""
    if validation.is_valid:
        _log_info(f"Validation passed: {pdf_path.name} ({validation.page_count} page(s))")
        return

    _log_warning(f"Validation found {len(validation.issues)} issue(s) in {pdf_path.name}")
    issue_limit = len(validation.issues) if verbose else 3
    for issue in validation.issues[:issue_limit]:
        _log_warning(f"  - {issue}")
    if len(validation.issues) > issue_limit:
        _log_debug(f"  ... and {len(validation.issues) - issue_limit} more issues")
