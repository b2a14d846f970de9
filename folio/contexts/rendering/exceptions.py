"""Exceptions raised by the rendering context."""

from pathlib import Path
from typing import Optional


class RenderError(Exception):
    """
    Base class for every failure of a render run.

    Attributes:
        message: Error description
        input_path: Document being rendered, when known
        original_error: The underlying browser or OS error, when there is one
    """

    def __init__(
        self,
        message: str,
        input_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.input_path = input_path
        self.original_error = original_error

        parts = [message]
        if original_error is not None:
            # Playwright messages carry a multi-line call log; keep the first line
            detail = str(original_error).strip()
            if detail:
                parts.append(f"Original error: {detail.splitlines()[0]}")

        super().__init__("\n".join(parts))


class MissingInputError(RenderError):
    """The HTML document to render does not exist."""


class RenderEngineFailure(RenderError):
    """The headless browser failed to launch, load, or print the document."""


class EngineLaunchError(RenderEngineFailure):
    """The browser process could not be started (missing binaries, sandbox denial)."""


class ContentRenderError(RenderEngineFailure):
    """The browser started but loading or printing the document failed."""


class RenderTimeoutError(RenderEngineFailure):
    """Loading or printing did not settle within the configured timeout."""

    def __init__(
        self,
        message: str,
        timeout_ms: Optional[float] = None,
        input_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.timeout_ms = timeout_ms
        super().__init__(message, input_path=input_path, original_error=original_error)
