"""
Page-break allocation.

Each layout region (the single column, or the sidebar and the main column)
owns a RenderCursor: the page it is on and the vertical position of the next
baseline. Before a block is drawn, ensure_space() checks that the whole block
fits above the bottom margin and moves the cursor to the next page if not.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from folio.contexts.rendering.logger import _log_debug
from folio.contexts.rendering.typesetting import Typesetter


@dataclass
class RenderCursor:
    """
    Vertical position of one region.

    Attributes:
        region: Region name (e.g., "main", "sidebar")
        page: Current page (0-indexed)
        y: Next baseline in mm from the top of the page
        top: Where the region restarts on a new page
    """

    region: str
    page: int
    y: float
    top: float

    def advance(self, height: float) -> None:
        self.y += height


class PageAllocator:
    """
    Decides where blocks go and appends pages when a region runs out of room.

    Args:
        typesetter: Display list that owns the pages
        top_margin: Default restart position on a new page (mm)
        bottom_margin: Space kept free at the bottom of every page (mm)
        on_new_page: Called with the index of every appended page, before any
            content is placed on it (e.g., to paint a background)
    """

    def __init__(
        self,
        typesetter: Typesetter,
        top_margin: float,
        bottom_margin: float,
        on_new_page: Optional[Callable[[int], None]] = None,
    ):
        self.typesetter = typesetter
        self.top_margin = top_margin
        self.bottom_margin = bottom_margin
        self.on_new_page = on_new_page
        self.cursors: Dict[str, RenderCursor] = {}

    @property
    def bottom(self) -> float:
        """Lowest baseline allowed on a page (mm from top)."""
        return self.typesetter.page_height - self.bottom_margin

    @property
    def usable_height(self) -> float:
        return self.bottom - self.top_margin

    def cursor(self, region: str, start: Optional[float] = None) -> RenderCursor:
        """Create a cursor for a region on the first page, starting at `start` (default: top margin)."""
        cursor = RenderCursor(
            region=region,
            page=0,
            y=self.top_margin if start is None else start,
            top=self.top_margin,
        )
        self.cursors[region] = cursor
        return cursor

    def fits(self, required_height: float, cursor: RenderCursor) -> bool:
        return cursor.y + required_height <= self.bottom

    def ensure_space(self, required_height: float, cursor: RenderCursor) -> bool:
        """
        Make room for a block of `required_height` below the cursor.

        Moves the cursor to the top of its next page when the block would cross
        the bottom margin. A cursor already at the top of its page never breaks,
        since the block could not fit any better on a fresh page.

        Args:
            required_height: Full height of the block about to be drawn (mm)
            cursor: Region cursor to check

        Returns:
            True if a page break occurred
        """
        if self.fits(required_height, cursor) or cursor.y <= cursor.top:
            return False

        self.next_page(cursor)
        return True

    def next_page(self, cursor: RenderCursor) -> None:
        """Move a cursor to its next page, appending a page if it was on the last one."""
        target = cursor.page + 1
        if target >= self.typesetter.page_count:
            index = self.typesetter.add_page()
            _log_debug(f"Page {index + 1} appended ({cursor.region} overflow)")
            if self.on_new_page is not None:
                self.on_new_page(index)

        cursor.page = target
        cursor.y = cursor.top
