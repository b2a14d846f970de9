"""
Session logger setup shared by the rendering and styling contexts.

Each session writes a DEBUG log file into its own directory. The colourised
console sink is optional so scripted runs can stay quiet while the session
log still captures everything. Context-specific wrappers live in
contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors per level, overridable per context
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[dict] = None,
    level_colors: Optional[dict] = None,
    console: bool = True,
    console_level: str = "INFO",
) -> Path:
    """
    Start a logging session for a context and write its provenance header.

    Any sinks left over from an earlier session in this process are removed
    first, so a second render in the same interpreter gets its own log file.

    Args:
        context_name: Context identifier, used as the log file stem ("render", "style")
        log_dir: Directory for this logging session (created if missing)
        extra_provenance: Additional key-value pairs for the provenance header
        level_colors: Override console colors (e.g., {"INFO": "<cyan>"})
        console: Also log to stdout; False keeps the session file-only
        console_level: Minimum level shown on stdout

    Returns:
        Path to the session log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")

    if console:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance({"Log file": log_file, **(extra_provenance or {})})

    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """Log where and how this process was started, framed by separator lines."""
    logger.info("=" * 80)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
