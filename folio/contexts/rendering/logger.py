"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger
from reportlab import Version as REPORTLAB_VERSION

from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, console_level: str = "INFO") -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        console_level: Minimum level shown on the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"reportlab": REPORTLAB_VERSION},
        console_level=console_level,
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


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(resume_name: str, layout: str, presets) -> None:
    """Log start of a render with context."""
    _log_info(f"Rendering resume: {resume_name} ({layout})")
    if presets:
        _log_debug(f"  Presets: {', '.join(presets)}")


def log_render_result(
    resume_name: str,
    result,  # RenderedResume
    elapsed_time: float,
) -> None:
    """
    Log render result with page and size statistics.

    Args:
        resume_name: Display name of the resume
        result: RenderedResume from render_resume()
        elapsed_time: Time taken to render
    """
    _log_success(f"{resume_name}: {result.page_count} page(s) ({elapsed_time:.2f}s)")
    _log_debug(f"  Draw operations: {len(result.operations)}")
    _log_debug(f"  PDF size: {len(result.pdf_bytes)} bytes")


def log_validation_result(resume_name: str, diagnostics) -> None:
    """
    Log layout diagnostics for a rendered resume.

    Args:
        resume_name: Display name of the resume
        diagnostics: DocumentDiagnostics from analyze_layout()
    """
    issues = diagnostics.get_inherited_issues()
    if not issues:
        _log_success(f"{resume_name}: layout valid ({diagnostics.actual_page_count} page(s))")
        return

    _log_error(f"{resume_name}: {len(issues)} layout issue(s)")
    for i, issue in enumerate(issues, 1):
        _log_error(f"  Issue {i}: {issue}")
