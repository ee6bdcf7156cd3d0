"""
Default geometry, typography and colors for the two resume layouts.

All lengths are in millimetres on an A4 page; font sizes are in points.
These dataclasses double as OmegaConf structured configs, so presets from
layout_presets.yaml are type-checked against them when merged
(see config_resolver.py).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

# Fonts (reportlab standard Type 1 fonts, always available)
FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

BULLET = "•"
LIST_SEPARATOR = "  •  "


@dataclass
class Palette:
    """Hex colors. `shade` fills the two-column sidebar, `inverse` is text on the banner."""

    primary: str = "#2980B9"  # Professional blue
    secondary: str = "#34495E"  # Dark gray
    text: str = "#2C3E50"  # Text gray
    shade: str = "#ECF0F1"  # Light gray
    inverse: str = "#FFFFFF"


@dataclass
class ColumnMetrics:
    """
    Font sizes and vertical rhythm for one column.

    Attributes:
        heading_size: Section heading font size
        heading_gap: Distance from heading baseline to first body baseline
        rule_offset: Distance from heading baseline down to the underline rule
        rule_width: Underline stroke width (points)
        section_reserve: Space a section heading needs before it may start on a page
        section_gap: Space after a section body
        title_size: Entry title (position, degree) font size
        title_height: Advance after an entry title line
        body_size: Prose and bullet font size
        line_height: Advance per wrapped prose/bullet line
        detail_size: Secondary line font size (issuer | date, descriptions)
        detail_height: Advance per secondary line
        bullet_indent: Horizontal offset from bullet glyph to bullet text
        detail_indent: Horizontal offset of indented secondary lines
        entry_gap: Space between entries of the same section
    """

    heading_size: float = 14
    heading_gap: float = 8
    rule_offset: float = 2
    rule_width: float = 0.6
    section_reserve: float = 20
    section_gap: float = 4
    title_size: float = 11
    title_height: float = 5
    body_size: float = 10
    line_height: float = 5
    detail_size: float = 9
    detail_height: float = 4
    bullet_indent: float = 4
    detail_indent: float = 4
    entry_gap: float = 3


@dataclass
class PageSettings:
    page_width: float = 210
    page_height: float = 297
    top_margin: float = 15
    bottom_margin: float = 15
    palette: Palette = field(default_factory=Palette)


@dataclass
class SingleColumnSettings(PageSettings):
    """Full-width banner header, one flowing column."""

    margin: float = 15
    banner_height: float = 45
    name_size: float = 24
    name_baseline: float = 20
    contact_size: float = 9
    contact_baseline: float = 28
    links_offset: float = 4
    body_top: float = 55
    main: ColumnMetrics = field(default_factory=ColumnMetrics)


def _sidebar_metrics() -> ColumnMetrics:
    return ColumnMetrics(
        heading_size=11,
        heading_gap=6,
        rule_offset=1.5,
        section_reserve=15,
        section_gap=5,
        body_size=9,
        line_height=4.5,
        detail_size=8.5,
        detail_height=4.5,
        bullet_indent=3.5,
    )


def _two_column_main_metrics() -> ColumnMetrics:
    return ColumnMetrics(
        heading_size=12,
        heading_gap=7,
        section_reserve=18,
        title_size=10.5,
        title_height=4.5,
        body_size=9,
        line_height=4.5,
        detail_size=8.5,
        detail_height=4,
        bullet_indent=3.5,
        detail_indent=3.5,
    )


@dataclass
class TwoColumnSettings(PageSettings):
    """Shaded fixed-width sidebar on the left, main column on the right."""

    sidebar_width: float = 68
    sidebar_padding: float = 8
    column_gap: float = 8
    right_margin: float = 12
    name_size: float = 18
    name_line_height: float = 7.5
    name_gap: float = 5
    sidebar: ColumnMetrics = field(default_factory=_sidebar_metrics)
    main: ColumnMetrics = field(default_factory=_two_column_main_metrics)

    @property
    def sidebar_x(self) -> float:
        return self.sidebar_padding

    @property
    def sidebar_content_width(self) -> float:
        return self.sidebar_width - 2 * self.sidebar_padding

    @property
    def main_x(self) -> float:
        return self.sidebar_width + self.column_gap

    @property
    def main_width(self) -> float:
        return self.page_width - self.main_x - self.right_margin


class Layout(str, Enum):
    """Resume layout strategies."""

    SINGLE = "single"
    TWO_COLUMN = "two-column"

    @classmethod
    def parse(cls, value: Union[str, "Layout"]) -> "Layout":
        """Accept a Layout or its string value; unknown names raise ValueError."""
        try:
            return cls(value)
        except ValueError:
            choices = [layout.value for layout in cls]
            raise ValueError(f"Unknown layout '{value}'. Available layouts: {choices}") from None
