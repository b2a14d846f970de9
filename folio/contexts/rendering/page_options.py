"""
Page options for printing HTML to PDF.

Options resolve in three layers, later layers overriding earlier ones:
built-in defaults, a named preset from page_options.yaml, explicit overrides.

Examples:
    >>> resolve_page_options()                                  # US Letter, 0.5in margins
    >>> resolve_page_options(preset="a4")                       # A4 paper
    >>> resolve_page_options(preset="a4", overrides={"print_background": False})
"""

import os
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
PAGE_OPTIONS_PATH = Path(os.getenv("PAGE_OPTIONS_PATH", "config/page_options.yaml"))

# Paper sizes understood by Chromium's print-to-PDF, keyed by lowercase name
PAGE_FORMATS = {
    name.lower(): name
    for name in ["Letter", "Legal", "Tabloid", "Ledger", "A0", "A1", "A2", "A3", "A4", "A5", "A6"]
}

# Physical length with unit, e.g. "0.5in", "12.7mm", "48px"
LENGTH_PATTERN = re.compile(r"^\d+(\.\d+)?(px|in|cm|mm)$")

DEFAULT_MARGIN = "0.5in"


class InvalidPageOptionsError(ValueError):
    """Raised when page options or a page preset cannot be used for printing."""

    pass


@dataclass
class Margins:
    """Page margins, each a length string such as "0.5in" or "10mm"."""

    top: str = DEFAULT_MARGIN
    right: str = DEFAULT_MARGIN
    bottom: str = DEFAULT_MARGIN
    left: str = DEFAULT_MARGIN

    def __post_init__(self):
        for side in ("top", "right", "bottom", "left"):
            value = str(getattr(self, side)).strip()
            if not LENGTH_PATTERN.match(value):
                raise InvalidPageOptionsError(
                    f"Invalid {side} margin: {value!r} (expected a number followed by px, in, cm or mm)"
                )
            setattr(self, side, value)

    @classmethod
    def uniform(cls, value: str) -> "Margins":
        """Same margin on all four sides."""
        return cls(top=value, right=value, bottom=value, left=value)


@dataclass
class PageOptions:
    """
    How the browser paginates a document when printing it.

    Attributes:
        page_format: Named paper size (Letter, Legal, Tabloid, Ledger, A0-A6)
        print_background: Render background colors and images
        margins: Page margins on all four sides
        use_document_page_size: Let CSS @page size rules override page_format
    """

    page_format: str = "Letter"
    print_background: bool = True
    margins: Margins = field(default_factory=Margins)
    use_document_page_size: bool = True

    def __post_init__(self):
        canonical = PAGE_FORMATS.get(str(self.page_format).strip().lower())
        if canonical is None:
            available = ", ".join(PAGE_FORMATS.values())
            raise InvalidPageOptionsError(
                f"Unknown page format: {self.page_format}. Available: {available}"
            )
        self.page_format = canonical

        if isinstance(self.margins, dict):
            self.margins = Margins(**self.margins)

        for flag in ("print_background", "use_document_page_size"):
            if not isinstance(getattr(self, flag), bool):
                raise InvalidPageOptionsError(f"{flag} must be true or false, got: {getattr(self, flag)!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageOptions":
        """Build options from a plain dict, rejecting unknown keys."""
        known = {"page_format", "print_background", "margins", "use_document_page_size"}
        unknown = set(data) - known
        if unknown:
            raise InvalidPageOptionsError(f"Unknown page option(s): {', '.join(sorted(unknown))}")

        margins = data.get("margins")
        if margins is not None:
            if not isinstance(margins, dict):
                raise InvalidPageOptionsError(
                    f"margins must map sides to lengths, got: {margins!r}"
                )
            unknown_sides = set(margins) - {"top", "right", "bottom", "left"}
            if unknown_sides:
                raise InvalidPageOptionsError(
                    f"Unknown margin side(s): {', '.join(sorted(unknown_sides))}"
                )
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_pdf_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Playwright's page.pdf()."""
        return {
            "format": self.page_format,
            "print_background": self.print_background,
            "margin": asdict(self.margins),
            "prefer_css_page_size": self.use_document_page_size,
        }


def load_page_presets(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the named presets from page_options.yaml.

    Args:
        config_path: Optional path to config file (defaults to PAGE_OPTIONS_PATH env variable)

    Returns:
        Dict mapping preset names to partial option dicts
        Example: {"a4": {"page_format": "A4"}, "draft": {"print_background": False}}
    """
    if config_path is None:
        config_path = PAGE_OPTIONS_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise InvalidPageOptionsError(f"Page options config not found: {config_path}")

    loaded = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True) or {}
    presets = loaded.get("presets") or {}
    return {name: preset or {} for name, preset in presets.items()}


def resolve_page_options(
    preset: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    config_path: Optional[Path] = None,
) -> PageOptions:
    """
    Resolve page options from defaults, an optional preset and optional overrides.

    Args:
        preset: Preset name from page_options.yaml (e.g., "a4", "tight")
        overrides: Partial option dict applied last (e.g., {"margins": {"top": "1in"}})
        config_path: Optional path to page_options.yaml (defaults to PAGE_OPTIONS_PATH)

    Returns:
        Validated PageOptions

    Raises:
        InvalidPageOptionsError: If the preset is unknown or the merged options are invalid
    """
    merged = OmegaConf.create(PageOptions().to_dict())

    if preset is not None:
        presets = load_page_presets(config_path)
        if preset not in presets:
            available = ", ".join(sorted(presets)) or "(none)"
            raise InvalidPageOptionsError(f"Unknown page preset: {preset}. Available: {available}")
        merged = OmegaConf.merge(merged, presets[preset])

    if overrides:
        merged = OmegaConf.merge(merged, overrides)

    return PageOptions.from_dict(OmegaConf.to_container(merged, resolve=True))
