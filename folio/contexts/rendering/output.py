"""
Output sink: file names, data URLs and writing PDFs to disk.
"""

import base64
import re
from pathlib import Path
from typing import Optional, Union

from folio.contexts.rendering.defaults import Layout
from folio.contexts.rendering.logger import _log_debug

# Characters that would turn a name into a path
UNSAFE_FILENAME_CHARS = re.compile(r"[/\\]")


def resume_filename(full_name: Optional[str], layout: Union[Layout, str] = Layout.SINGLE) -> str:
    """
    Download name for a rendered resume.

    Examples:
        >>> resume_filename("Jane Doe", "single")
        'Jane Doe_Resume.pdf'
        >>> resume_filename(None, "two-column")
        'Resume_TwoColumn_Resume.pdf'
    """
    name = UNSAFE_FILENAME_CHARS.sub("_", full_name or "") or "Resume"
    if Layout.parse(layout) is Layout.TWO_COLUMN:
        return f"{name}_TwoColumn_Resume.pdf"
    return f"{name}_Resume.pdf"


def to_data_url(pdf_bytes: bytes) -> str:
    """Encode PDF bytes as a data URL for in-browser preview."""
    encoded = base64.b64encode(pdf_bytes).decode("ascii")
    return f"data:application/pdf;base64,{encoded}"


def save_pdf(pdf_bytes: bytes, filename: str, output_dir: Path) -> Path:
    """
    Write PDF bytes to output_dir/filename, creating the directory if needed.

    Returns:
        Path to the written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    pdf_path = output_dir / filename
    pdf_path.write_bytes(pdf_bytes)
    _log_debug(f"Wrote {len(pdf_bytes)} bytes to {pdf_path}")
    return pdf_path
