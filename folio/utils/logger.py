"""
Shared loguru setup.

Each session gets a DEBUG log file under its own directory plus a colorized
console sink. Context wrappers (contexts/{context}/logger.py) add the
[prefix] and call setup_logger() with their own provenance.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from folio import __version__

load_dotenv()

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console_level: str = "INFO",
) -> Path:
    """
    Point loguru at a fresh session log and the console.

    Args:
        context_name: Log file stem (e.g., "render" -> render.log)
        log_dir: Session directory, created if missing
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Minimum level echoed to stdout; the file always gets DEBUG

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/render_20251114_123456"),
            extra_provenance={"reportlab": "4.2.0"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Write the session header: folio version, command line, cwd, Python, extras."""
    logger.info("=" * 80)
    logger.info(f"folio: {__version__}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
