"""
Theme configuration for the CSS utility build.

The theme lives in config/theme.yaml and is exported to the tailwind.config.js
module the build tool reads. Keeping it in YAML lets it be validated before a
build silently drops an unknown color or animation.

Examples:
    >>> theme = load_theme()
    >>> theme.colors["primary"]["500"]
    '#3b82f6'
    >>> Path("tailwind.config.js").write_text(to_tailwind_config(theme))
"""

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.styling.logger import _log_debug, _log_info, _log_warning

load_dotenv()
THEME_CONFIG_PATH = Path(os.getenv("THEME_CONFIG_PATH", "config/theme.yaml"))

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
KEYFRAME_STOP_PATTERN = re.compile(r"^(?:from|to|(\d{1,3}(?:\.\d+)?)%)$")

# Keyframes the build tool ships with; animations may use them without defining them
BUILTIN_KEYFRAMES = {"spin", "ping", "pulse", "bounce"}

THEME_KEYS = {"content", "colors", "animations", "keyframes"}

GENERATED_HEADER = (
    "// Generated from config/theme.yaml by scripts/generate_resume_pdf.py theme.\n"
    "// Edit the YAML and re-export instead of editing this file.\n"
)


class ThemeConfigError(ValueError):
    """Raised when the theme configuration is missing or malformed."""

    pass


@dataclass
class ThemeConfig:
    """
    Theme configuration.

    Attributes:
        content: Glob patterns (relative to the project root) scanned for class names
        colors: Color name -> hex string, or color name -> shade -> hex string
        animations: Animation name -> "<keyframes> <duration> [easing] [iteration...]"
        keyframes: Keyframes name -> stop selector ("from", "50%", "0%, 100%") -> CSS properties
    """

    content: List[str]
    colors: Dict[str, Union[str, Dict[str, str]]] = field(default_factory=dict)
    animations: Dict[str, str] = field(default_factory=dict)
    keyframes: Dict[str, Dict[str, Dict[str, str]]] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise ThemeConfigError describing the first problem found."""
        if not self.content or not all(isinstance(p, str) and p.strip() for p in self.content):
            raise ThemeConfigError("Theme must list at least one non-empty content glob")

        for name, value in self.colors.items():
            shades = value if isinstance(value, dict) else {"DEFAULT": value}
            for shade, hex_value in shades.items():
                if not isinstance(hex_value, str) or not HEX_COLOR_PATTERN.match(hex_value):
                    raise ThemeConfigError(f"Color {name}.{shade} is not a hex color: {hex_value!r}")

        for name, stops in self.keyframes.items():
            if not isinstance(stops, dict) or not stops:
                raise ThemeConfigError(f"Keyframes {name} must map stops to CSS properties")
            for selector, properties in stops.items():
                _validate_keyframe_selector(name, selector)
                if not isinstance(properties, dict):
                    raise ThemeConfigError(
                        f"Keyframes {name} stop {selector!r} must map CSS properties to values"
                    )

        for name, declaration in self.animations.items():
            if not isinstance(declaration, str) or not declaration.strip():
                raise ThemeConfigError(f"Animation {name} has an empty declaration")
            keyframes_name = declaration.split()[0]
            if keyframes_name not in self.keyframes and keyframes_name not in BUILTIN_KEYFRAMES:
                raise ThemeConfigError(
                    f"Animation {name} uses undefined keyframes: {keyframes_name}"
                )


def _validate_keyframe_selector(keyframes_name: str, selector: str) -> None:
    for stop in selector.split(","):
        stop = stop.strip()
        match = KEYFRAME_STOP_PATTERN.match(stop)
        if match is None:
            raise ThemeConfigError(
                f"Keyframes {keyframes_name} has invalid stop {stop!r} (expected from, to or N%)"
            )
        if match.group(1) is not None and float(match.group(1)) > 100:
            raise ThemeConfigError(f"Keyframes {keyframes_name} stop {stop!r} is over 100%")


def _stringify_keys(value: Any) -> Any:
    """YAML reads shade names like 50 as ints; the build tool expects string keys."""
    if isinstance(value, dict):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify_keys(v) for v in value]
    return value


def load_theme(config_path: Optional[Path] = None) -> ThemeConfig:
    """
    Load and validate the theme configuration.

    Args:
        config_path: Optional path to theme YAML (defaults to THEME_CONFIG_PATH env variable)

    Returns:
        Validated ThemeConfig

    Raises:
        ThemeConfigError: If the file is missing, has unknown sections, or fails validation
    """
    if config_path is None:
        config_path = THEME_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise ThemeConfigError(f"Theme config not found: {config_path}")

    data = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    if not isinstance(data, dict):
        raise ThemeConfigError(f"Theme config must be a mapping: {config_path}")

    unknown = set(data) - THEME_KEYS
    if unknown:
        raise ThemeConfigError(f"Unknown theme section(s): {', '.join(sorted(unknown))}")

    data = _stringify_keys(data)
    theme = ThemeConfig(
        content=list(data.get("content") or []),
        colors=data.get("colors") or {},
        animations=data.get("animations") or {},
        keyframes=data.get("keyframes") or {},
    )
    theme.validate()

    _log_debug(
        f"Loaded theme from {config_path}: {len(theme.colors)} colors, "
        f"{len(theme.animations)} animations, {len(theme.keyframes)} keyframes"
    )
    return theme


def content_files(theme: ThemeConfig, root: Path) -> List[Path]:
    """
    List the files the content globs match under root.

    Returns:
        Sorted, de-duplicated file paths
    """
    root = Path(root)
    matched = set()
    for pattern in theme.content:
        # Globs are written relative to the project root ("./web/...")
        pattern = pattern[2:] if pattern.startswith("./") else pattern
        hits = [p for p in root.glob(pattern) if p.is_file()]
        if not hits:
            _log_warning(f"Content glob matches no files: {pattern}")
        matched.update(hits)
    return sorted(matched)


def to_tailwind_config(theme: ThemeConfig) -> str:
    """Render the theme as the text of a CommonJS tailwind.config.js module."""
    config = {
        "content": theme.content,
        "theme": {
            "extend": {
                "colors": theme.colors,
                "animation": theme.animations,
                "keyframes": theme.keyframes,
            },
        },
        "plugins": [],
    }
    return f"{GENERATED_HEADER}module.exports = {json.dumps(config, indent=2)};\n"


def write_tailwind_config(theme: ThemeConfig, output_path: Path) -> Path:
    """Write tailwind.config.js, overwriting any existing file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(to_tailwind_config(theme), encoding="utf-8")
    _log_info(f"Wrote {output_path}")
    return output_path
