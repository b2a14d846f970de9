"""
Styling Context

Responsibilities:
- Loads and validates the theme configuration (content globs, colors, animations, keyframes)
- Lists the source files the CSS utility build scans for class names
- Exports the theme as the build tool's tailwind.config.js module

Owns: theme configuration
Never: Runs the CSS build itself
"""

from folio.contexts.styling.theme import (
    ThemeConfig,
    ThemeConfigError,
    content_files,
    load_theme,
    to_tailwind_config,
    write_tailwind_config,
)

__all__ = [
    "ThemeConfig",
    "ThemeConfigError",
    "content_files",
    "load_theme",
    "to_tailwind_config",
    "write_tailwind_config",
]
