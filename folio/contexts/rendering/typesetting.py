"""
Typesetting primitives: text measurement and a replayable display list.

Drawing calls are recorded as DrawOp entries per page instead of going straight
to a reportlab canvas. Two-column layouts fill the sidebar and the main column
independently, so content may be appended to an earlier page after a later one
exists; reportlab's canvas only moves forward, so the display list is replayed
page by page once rendering finishes.

The same wrap_text() call sizes a block before allocation and produces the
lines that are drawn, so measured and drawn heights always agree.
"""

import re
from dataclasses import dataclass
from io import BytesIO
from typing import Iterable, List, Optional

from reportlab.lib.colors import HexColor
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

# Words and the whitespace runs between them ("SQL  •  Python" keeps its spacing)
TOKEN_PATTERN = re.compile(r"\S+|\s+")


def _fit_prefix(word: str, font: str, size: float, max_width_pt: float) -> int:
    """Length of the longest prefix of word that fits (at least one character)."""
    for length in range(len(word), 0, -1):
        if stringWidth(word[:length], font, size) <= max_width_pt:
            return length
    return 1


def wrap_text(text: str, font: str, size: float, width: float) -> List[str]:
    """
    Greedy word-wrap based on rendered font metrics.

    Breaks only at whitespace (the whitespace run at a break is dropped, runs
    inside a line are kept verbatim). A single word wider than the column is
    hard-broken by characters. Embedded newlines force a break.

    Args:
        text: Text to wrap
        font: reportlab font name
        size: Font size in points
        width: Available width in millimetres

    Returns:
        Wrapped lines (empty list for blank text)
    """
    if not text or not text.strip():
        return []

    max_width_pt = width * mm
    lines: List[str] = []

    for paragraph in text.split("\n"):
        line = ""
        space = ""
        for token in TOKEN_PATTERN.findall(paragraph.strip()):
            if token.isspace():
                space = token
                continue

            candidate = f"{line}{space}{token}" if line else token
            space = ""
            if stringWidth(candidate, font, size) <= max_width_pt:
                line = candidate
                continue

            if line:
                lines.append(line)
            line = token
            while len(line) > 1 and stringWidth(line, font, size) > max_width_pt:
                cut = _fit_prefix(line, font, size, max_width_pt)
                lines.append(line[:cut])
                line = line[cut:]

        if line:
            lines.append(line)

    return lines


def measure(text: str, font: str, size: float, width: float) -> int:
    """Number of lines wrap_text() produces for text at this font and width."""
    return len(wrap_text(text, font, size, width))


def text_runs(operations: Iterable["DrawOp"], page: Optional[int] = None) -> List[str]:
    """Drawn strings in drawing order, for one page (0-indexed) or all pages."""
    return [
        op.text
        for op in operations
        if op.kind == "text" and (page is None or op.page == page)
    ]


@dataclass(frozen=True)
class DrawOp:
    """
    One recorded drawing operation.

    Coordinates are millimetres from the top-left corner of the page; for text,
    `y` is the baseline. `page` is 0-indexed.
    """

    kind: str  # "text" | "rect" | "rule"
    page: int
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    text: str = ""
    font: str = ""
    size: float = 0.0
    color: str = ""
    line_width: float = 0.0


class Typesetter:
    """
    Page-indexed display list with measurement helpers.

    Attributes:
        page_width: Page width in mm
        page_height: Page height in mm
        pages: Recorded operations, one list per page
    """

    def __init__(self, page_width: float, page_height: float):
        self.page_width = page_width
        self.page_height = page_height
        self.pages: List[List[DrawOp]] = [[]]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self) -> int:
        """Append an empty page and return its 0-based index."""
        self.pages.append([])
        return len(self.pages) - 1

    # Measurement

    def wrap(self, text: str, font: str, size: float, width: float) -> List[str]:
        return wrap_text(text, font, size, width)

    def measure(self, text: str, font: str, size: float, width: float) -> int:
        return measure(text, font, size, width)

    # Recording

    def text(
        self, page: int, x: float, y: float, text: str, font: str, size: float, color: str
    ) -> None:
        self.pages[page].append(
            DrawOp("text", page, x, y, text=text, font=font, size=size, color=color)
        )

    def rect(self, page: int, x: float, y: float, width: float, height: float, color: str) -> None:
        """Filled rectangle with its top-left corner at (x, y)."""
        self.pages[page].append(DrawOp("rect", page, x, y, width=width, height=height, color=color))

    def rule(
        self, page: int, x: float, y: float, width: float, color: str, line_width: float
    ) -> None:
        """Horizontal line from (x, y) to (x + width, y)."""
        self.pages[page].append(
            DrawOp("rule", page, x, y, width=width, color=color, line_width=line_width)
        )

    # Inspection

    @property
    def operations(self) -> List[DrawOp]:
        return [op for page_ops in self.pages for op in page_ops]

    def text_runs(self, page: Optional[int] = None) -> List[str]:
        """Drawn strings in drawing order, for one page or the whole document."""
        return text_runs(self.operations, page)

    # Output

    def render_pdf(self, title: Optional[str] = None, author: Optional[str] = None) -> bytes:
        """
        Replay the display list onto a reportlab canvas and return the PDF bytes.

        The canvas runs in invariant mode (fixed creation date and document ID),
        so identical display lists produce byte-identical PDFs.
        """
        buffer = BytesIO()
        canvas = Canvas(
            buffer, pagesize=(self.page_width * mm, self.page_height * mm), invariant=1
        )
        if title:
            canvas.setTitle(title)
        if author:
            canvas.setAuthor(author)

        for page_ops in self.pages:
            for op in page_ops:
                self._replay(canvas, op)
            canvas.showPage()

        canvas.save()
        return buffer.getvalue()

    def _replay(self, canvas: Canvas, op: DrawOp) -> None:
        # reportlab's origin is bottom-left
        if op.kind == "text":
            canvas.setFillColor(HexColor(op.color))
            canvas.setFont(op.font, op.size)
            canvas.drawString(op.x * mm, (self.page_height - op.y) * mm, op.text)
        elif op.kind == "rect":
            canvas.setFillColor(HexColor(op.color))
            canvas.rect(
                op.x * mm,
                (self.page_height - op.y - op.height) * mm,
                op.width * mm,
                op.height * mm,
                stroke=0,
                fill=1,
            )
        elif op.kind == "rule":
            canvas.setStrokeColor(HexColor(op.color))
            canvas.setLineWidth(op.line_width)
            y = (self.page_height - op.y) * mm
            canvas.line(op.x * mm, y, (op.x + op.width) * mm, y)
        else:
            raise ValueError(f"Unknown draw operation: {op.kind}")
