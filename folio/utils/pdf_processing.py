"""
PDF inspection utilities for reading rendered resumes back.

Main class:
    PDFDocument: Parsed PDF with column-based line extraction, search, and
                 filled-rectangle lookup.

Helper functions:
    page_count: Quick page count without full extraction.
    normalize_for_matching: Text normalization for fuzzy matching.
    cluster_by_y_tolerance: Y-coordinate clustering for line detection.
"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pdfplumber
from pypdf import PdfReader

PDFSource = Union[str, Path, bytes]


def _as_stream(source: PDFSource):
    """pdfplumber and pypdf accept paths or binary streams; wrap raw bytes."""
    if isinstance(source, bytes):
        return BytesIO(source)
    return str(source)


def page_count(source: PDFSource) -> Optional[int]:
    """Get page count from a PDF path or bytes, or None if unreadable."""
    try:
        reader = PdfReader(_as_stream(source))
        return len(reader.pages)
    except Exception:
        return None


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())


def cluster_by_y_tolerance(chars: List, tolerance: float = 3.0) -> List[List]:
    """
    Group characters into lines by Y-coordinate proximity.

    Handles baseline shifts between bold/regular text that would otherwise split lines.
    """
    if not chars:
        return []

    sorted_chars = sorted(chars, key=lambda c: c["top"])

    lines = []
    current_line = [sorted_chars[0]]
    current_y = sorted_chars[0]["top"]

    for char in sorted_chars[1:]:
        if abs(char["top"] - current_y) <= tolerance:
            current_line.append(char)
        else:
            lines.append(current_line)
            current_line = [char]
            current_y = char["top"]

    lines.append(current_line)
    return lines


@dataclass(frozen=True)
class FilledRect:
    """A filled rectangle on a page, in PDF points with a top-left origin."""

    x0: float
    top: float
    width: float
    height: float


class PDFDocument:
    """
    Parsed PDF with column-based text extraction.

    Page data is lazily loaded and cached on first access.

    Args:
        source: Path to a PDF file, or the PDF bytes themselves
        column_splits: X-coordinate ratios (0.0-1.0) defining column boundaries.
                      [0.33] creates 2 columns (0-33%, 33%-100%).
                      None (default) = single full-width column.
        y_tolerance: Max Y-distance (points) to group characters as same line.

    Example:
        >>> pdf = PDFDocument(Path("Jane_Doe_TwoColumn_Resume.pdf"), column_splits=[0.33])
        >>> for line in pdf.get_lines(page=1, column=0):
        ...     print(line)
    """

    def __init__(
        self,
        source: PDFSource,
        column_splits: Optional[List[float]] = None,
        y_tolerance: float = 3.0,
    ):
        if isinstance(source, str):
            source = Path(source)
        if isinstance(source, Path) and not source.exists():
            raise FileNotFoundError(f"PDF not found: {source}")

        self.source = source
        self.column_splits = sorted(column_splits or [])
        self.num_columns = len(self.column_splits) + 1
        self.y_tolerance = y_tolerance
        self._pages_cache: Optional[Dict[int, List[List[str]]]] = None
        self._rects_cache: Optional[Dict[int, List[FilledRect]]] = None
        self._page_count: Optional[int] = None

    @property
    def page_count(self) -> int:
        if self._page_count is None:
            self._page_count = page_count(self.source) or 0
        return self._page_count

    def _extract_pages(self) -> None:
        """
        Extract text lines (per column) and filled rectangles from all pages.

        Characters are binned into columns by their x-position, then clustered
        into lines by y-tolerance and joined left to right.
        """
        pages_data: Dict[int, List[List[str]]] = {}
        rects_data: Dict[int, List[FilledRect]] = {}

        with pdfplumber.open(_as_stream(self.source)) as pdf:
            for page_num, page in enumerate(pdf.pages, start=1):
                page_width = page.width
                boundaries = (
                    [0.0] + [page_width * ratio for ratio in self.column_splits] + [page_width]
                )

                column_chars: List[List] = [[] for _ in range(self.num_columns)]
                for char in page.chars:
                    x = char["x0"]
                    for col_idx in range(self.num_columns):
                        if boundaries[col_idx] <= x < boundaries[col_idx + 1]:
                            column_chars[col_idx].append(char)
                            break

                pages_data[page_num] = [self._chars_to_lines(chars) for chars in column_chars]
                rects_data[page_num] = [
                    FilledRect(x0=r["x0"], top=r["top"], width=r["width"], height=r["height"])
                    for r in page.rects
                    if r.get("fill")
                ]

        self._pages_cache = pages_data
        self._rects_cache = rects_data

    def _chars_to_lines(self, chars: List) -> List[str]:
        """Convert character list to text lines with Y-clustering."""
        text_lines = []
        for char_objs in cluster_by_y_tolerance(chars, tolerance=self.y_tolerance):
            char_objs.sort(key=lambda c: c["x0"])
            text_lines.append("".join(c["text"] for c in char_objs))
        return text_lines

    def _ensure_loaded(self) -> None:
        """Lazily load page data if not already cached."""
        if self._pages_cache is None:
            self._extract_pages()

    def get_lines(self, page: int, column: int = 0) -> List[str]:
        """
        Get text lines for a specific page and column.

        Args:
            page: Page number (1-indexed)
            column: Column index (0-indexed). Default 0.

        Returns:
            List of text lines, top-to-bottom order.
            Empty list if page/column doesn't exist.
        """
        self._ensure_loaded()
        page_data = self._pages_cache.get(page)
        if page_data is None or column >= len(page_data):
            return []
        return page_data[column]

    def get_rects(self, page: int) -> List[FilledRect]:
        """Filled rectangles drawn on a page (1-indexed), in drawing order."""
        self._ensure_loaded()
        return self._rects_cache.get(page, [])

    def full_text(self) -> str:
        """All lines of all pages and columns joined with newlines."""
        self._ensure_loaded()
        lines = []
        for page_num in sorted(self._pages_cache):
            for column_lines in self._pages_cache[page_num]:
                lines.extend(column_lines)
        return "\n".join(lines)

    def find(
        self, text: str, whole_line: bool = False, column: Optional[int] = None
    ) -> Optional[Tuple[int, int, int]]:
        """
        Find first occurrence of text in the document.

        Returns:
            Tuple of (page, column, line_index) for first match, or None.
        """
        result = self.find_all(text, whole_line=whole_line, column=column, limit=1)
        return result[0] if result else None

    def find_all(
        self,
        text: str,
        whole_line: bool = False,
        column: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Tuple[int, int, int]]:
        """
        Find all occurrences of text in the document.

        Args:
            text: Text to search for (normalized: lowercase, alphanumeric only)
            whole_line: If True, text must match entire line. If False, substring match.
            column: Limit search to specific column (None = all columns)
            limit: Maximum number of results to return (None = all)

        Returns:
            List of (page, column, line_index) tuples for each match.
        """
        self._ensure_loaded()

        results: List[Tuple[int, int, int]] = []
        text_norm = normalize_for_matching(text)

        for page_num in sorted(self._pages_cache.keys()):
            page_data = self._pages_cache[page_num]
            columns_to_search = [column] if column is not None else range(len(page_data))

            for col_idx in columns_to_search:
                if col_idx >= len(page_data):
                    continue

                for line_idx, line in enumerate(page_data[col_idx]):
                    line_norm = normalize_for_matching(line)
                    match = (text_norm == line_norm) if whole_line else (text_norm in line_norm)
                    if match:
                        results.append((page_num, col_idx, line_idx))
                        if limit and len(results) >= limit:
                            return results

        return results
