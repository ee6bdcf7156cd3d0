"""
Page layouts.

Both layouts fill a Typesetter display list; the generator turns it into PDF
bytes. Section order is fixed:

    summary, skills, experience, education, certifications, projects,
    publications, awards, languages, volunteer work, interests

The two-column layout moves contact details, skills and languages into a
shaded sidebar and keeps the remaining sections, in the same order, in the
main column. Each column paginates on its own cursor.
"""

from typing import Dict, Type

from folio.contexts.profile.resume_data_structure import ResumeData
from folio.contexts.rendering.defaults import (
    FONT_BOLD,
    FONT_REGULAR,
    LIST_SEPARATOR,
    Layout,
    PageSettings,
    SingleColumnSettings,
    TwoColumnSettings,
)
from folio.contexts.rendering.logger import _log_debug
from folio.contexts.rendering.page_allocator import PageAllocator
from folio.contexts.rendering.sections import ColumnFrame, SectionWriter
from folio.contexts.rendering.typesetting import Typesetter

DEFAULT_NAME = "Your Name"

SECTION_ORDER = (
    "summary",
    "skills",
    "experience",
    "education",
    "certifications",
    "projects",
    "publications",
    "awards",
    "languages",
    "volunteer_work",
    "interests",
)
SIDEBAR_SECTIONS = ("contact", "skills", "languages")
MAIN_SECTIONS = tuple(key for key in SECTION_ORDER if key not in SIDEBAR_SECTIONS)


class ResumeLayout:
    """Base class: turns ResumeData into a filled Typesetter."""

    layout: Layout

    def __init__(self, settings: PageSettings):
        self.settings = settings

    def render(self, data: ResumeData) -> Typesetter:
        raise NotImplementedError


class SingleColumnLayout(ResumeLayout):
    """Colored banner with name and contact line, then every section full width."""

    layout = Layout.SINGLE

    def __init__(self, settings: SingleColumnSettings):
        super().__init__(settings)

    def render(self, data: ResumeData) -> Typesetter:
        s = self.settings
        typesetter = Typesetter(s.page_width, s.page_height)
        allocator = PageAllocator(typesetter, s.top_margin, s.bottom_margin)

        self._draw_banner(typesetter, data)

        cursor = allocator.cursor("main", start=s.body_top)
        frame = ColumnFrame("main", s.margin, s.page_width - 2 * s.margin, s.main)
        writer = SectionWriter(typesetter, allocator, cursor, frame, s.palette, list_style="joined")
        written = writer.write_sections(data, SECTION_ORDER)

        _log_debug(f"Single column: {len(written)} section(s) on {typesetter.page_count} page(s)")
        return typesetter

    def _draw_banner(self, typesetter: Typesetter, data: ResumeData) -> None:
        s = self.settings
        palette = s.palette
        typesetter.rect(0, 0, 0, s.page_width, s.banner_height, palette.primary)
        typesetter.text(
            0, s.margin, s.name_baseline, data.full_name or DEFAULT_NAME,
            FONT_BOLD, s.name_size, palette.inverse,
        )

        contact_line = LIST_SEPARATOR.join(data.contact_items)
        if contact_line:
            typesetter.text(
                0, s.margin, s.contact_baseline, contact_line,
                FONT_REGULAR, s.contact_size, palette.inverse,
            )

        links_line = LIST_SEPARATOR.join(data.links)
        if links_line:
            typesetter.text(
                0, s.margin, s.contact_baseline + s.links_offset, links_line,
                FONT_REGULAR, s.contact_size, palette.inverse,
            )


class TwoColumnLayout(ResumeLayout):
    """Shaded sidebar (name, contact, skills, languages) beside the main column."""

    layout = Layout.TWO_COLUMN

    def __init__(self, settings: TwoColumnSettings):
        super().__init__(settings)

    def render(self, data: ResumeData) -> Typesetter:
        s = self.settings
        typesetter = Typesetter(s.page_width, s.page_height)

        def paint_sidebar(page: int) -> None:
            typesetter.rect(page, 0, 0, s.sidebar_width, s.page_height, s.palette.shade)

        paint_sidebar(0)
        allocator = PageAllocator(typesetter, s.top_margin, s.bottom_margin, on_new_page=paint_sidebar)

        sidebar = SectionWriter(
            typesetter,
            allocator,
            allocator.cursor("sidebar"),
            ColumnFrame("sidebar", s.sidebar_x, s.sidebar_content_width, s.sidebar),
            s.palette,
            list_style="bullets",
        )
        main = SectionWriter(
            typesetter,
            allocator,
            allocator.cursor("main"),
            ColumnFrame("main", s.main_x, s.main_width, s.main),
            s.palette,
        )

        # Name at the top of the sidebar, wrapped to its width
        name_lines = sidebar.wrap(data.full_name or DEFAULT_NAME, FONT_BOLD, s.name_size)
        sidebar.draw_block(
            name_lines, s.sidebar_x, FONT_BOLD, s.name_size, s.name_line_height, s.palette.secondary
        )
        sidebar.gap(s.name_gap)

        side_written = sidebar.write_sections(data, SIDEBAR_SECTIONS)
        main_written = main.write_sections(data, MAIN_SECTIONS)

        _log_debug(
            f"Two column: {len(side_written)} sidebar / {len(main_written)} main section(s) "
            f"on {typesetter.page_count} page(s)"
        )
        return typesetter


LAYOUTS: Dict[Layout, Type[ResumeLayout]] = {
    Layout.SINGLE: SingleColumnLayout,
    Layout.TWO_COLUMN: TwoColumnLayout,
}


def get_layout(layout: Layout, settings: PageSettings) -> ResumeLayout:
    """Instantiate the layout strategy for `layout` with resolved settings."""
    return LAYOUTS[Layout.parse(layout)](settings)
