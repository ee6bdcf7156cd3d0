"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Rich-text (HTML fragment) extraction
- Logger setup
- PDF inspection
- Timestamps
"""

from folio.utils.html_text import extract_segments, strip_html
from folio.utils.timestamp import now, today

__all__ = ["extract_segments", "strip_html", "now", "today"]
