"""
Section rendering.

A SectionWriter is bound to one column (its x-offset, width and metrics) and
one RenderCursor. Every block it emits is measured first, reserved whole with
the allocator, then drawn, so a wrapped bullet never straddles a page break.
Section headings only reserve a fixed minimum so they are not stranded at the
bottom of a page; the blocks that follow re-check individually. Headings are
not repeated when a section continues on a new page.

Sections whose data is absent or empty emit nothing at all.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from folio.contexts.profile.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    ListItem,
    ProjectEntry,
    ResumeData,
    VolunteerEntry,
    strip_scheme,
)
from folio.contexts.rendering.defaults import (
    BULLET,
    FONT_BOLD,
    FONT_ITALIC,
    FONT_REGULAR,
    LIST_SEPARATOR,
    ColumnMetrics,
    Palette,
)
from folio.contexts.rendering.page_allocator import PageAllocator, RenderCursor
from folio.contexts.rendering.typesetting import Typesetter
from folio.utils.html_text import extract_segments, strip_html

SECTION_HEADINGS = {
    "contact": "CONTACT",
    "summary": "PROFESSIONAL SUMMARY",
    "skills": "SKILLS",
    "experience": "PROFESSIONAL EXPERIENCE",
    "education": "EDUCATION",
    "certifications": "CERTIFICATIONS",
    "projects": "PROJECTS",
    "publications": "PUBLICATIONS",
    "awards": "AWARDS & HONORS",
    "languages": "LANGUAGES",
    "volunteer_work": "VOLUNTEER WORK",
    "interests": "INTERESTS",
}

# "Leadership – Managed a team of 12": a labeled bullet, not an intro paragraph
LABELED_BULLET = re.compile(r"^[A-Z][A-Za-z\s&]+\s*[–-]\s")
INTRO_MIN_LENGTH = 100


@dataclass(frozen=True)
class ColumnFrame:
    """Horizontal extent and metrics of the column a writer draws into."""

    region: str
    x: float
    width: float
    metrics: ColumnMetrics


def split_summary(summary: str) -> tuple:
    """
    Split a rich-text summary into (intro paragraph, bullet segments).

    With more than one extracted segment, the first one is an intro paragraph
    only if it is long (over 100 characters) and does not look like a
    "Label – text" bullet; all other segments are bullets. With one segment or
    fewer, the whole stripped field is the intro and there are no bullets.

    Returns:
        (intro or None, list of bullet strings)
    """
    segments = extract_segments(summary)
    if len(segments) <= 1:
        text = strip_html(summary)
        return (text or None), []

    first = segments[0]
    if len(first) > INTRO_MIN_LENGTH and not LABELED_BULLET.match(first):
        return first, segments[1:]
    return None, segments


def has_content(data: ResumeData, key: str) -> bool:
    """Whether a section would render anything for this resume."""
    if key == "contact":
        return bool(data.contact_items or data.links)
    if key == "summary":
        return bool(data.summary and extract_segments(data.summary))
    return bool(getattr(data, key))


class SectionWriter:
    """
    Draws resume sections into one column.

    Args:
        typesetter: Display list being filled
        allocator: Page allocator shared by all columns of the document
        cursor: This column's cursor
        frame: Column geometry and metrics
        palette: Colors
        list_style: "joined" renders skills/languages as one "  •  "-separated
            paragraph; "bullets" renders one bullet per item (narrow sidebar)
    """

    def __init__(
        self,
        typesetter: Typesetter,
        allocator: PageAllocator,
        cursor: RenderCursor,
        frame: ColumnFrame,
        palette: Palette,
        list_style: str = "joined",
    ):
        self.typesetter = typesetter
        self.allocator = allocator
        self.cursor = cursor
        self.frame = frame
        self.metrics = frame.metrics
        self.palette = palette
        self.list_style = list_style

        self._writers: Dict[str, Callable[[ResumeData], None]] = {
            "contact": self.write_contact,
            "summary": lambda data: self.write_summary(data.summary),
            "skills": lambda data: self.write_skills(data.skills),
            "experience": lambda data: self.write_experience(data.experience),
            "education": lambda data: self.write_education(data.education),
            "certifications": lambda data: self.write_certifications(data.certifications),
            "projects": lambda data: self.write_projects(data.projects),
            "publications": lambda data: self.write_publications(data.publications),
            "awards": lambda data: self.write_awards(data.awards),
            "languages": lambda data: self.write_languages(data.languages),
            "volunteer_work": lambda data: self.write_volunteer(data.volunteer_work),
            "interests": lambda data: self.write_interests(data.interests),
        }

    # =========================================================================
    # Primitives
    # =========================================================================

    def _draw(self, x: float, text: str, font: str, size: float, color: str) -> None:
        self.typesetter.text(self.cursor.page, x, self.cursor.y, text, font, size, color)

    def gap(self, height: float) -> None:
        self.cursor.advance(height)

    def wrap(self, text: str, font: str, size: float, indent: float = 0) -> List[str]:
        return self.typesetter.wrap(text, font, size, self.frame.width - indent)

    def draw_block(
        self,
        lines: Sequence[str],
        x: float,
        font: str,
        size: float,
        line_height: float,
        color: str,
        glyph_x: Optional[float] = None,
    ) -> None:
        """
        Reserve the whole block, then draw it line by line.

        A block taller than a full page cannot be kept together; it falls back
        to per-line allocation.

        Args:
            lines: Pre-wrapped lines
            x: Left edge of the text
            font, size, line_height, color: Typography
            glyph_x: If set, a bullet glyph is drawn at this x on the first line
        """
        if not lines:
            return

        height = len(lines) * line_height
        keep_together = height <= self.allocator.usable_height
        if keep_together:
            self.allocator.ensure_space(height, self.cursor)

        for index, line in enumerate(lines):
            if not keep_together:
                self.allocator.ensure_space(line_height, self.cursor)
            if index == 0 and glyph_x is not None:
                self._draw(glyph_x, BULLET, FONT_REGULAR, size, color)
            self._draw(x, line, font, size, color)
            self.cursor.advance(line_height)

    def heading(self, title: str) -> None:
        """Bold colored heading with a rule beneath it."""
        m = self.metrics
        self.allocator.ensure_space(m.section_reserve, self.cursor)
        self._draw(self.frame.x, title, FONT_BOLD, m.heading_size, self.palette.primary)
        self.typesetter.rule(
            self.cursor.page,
            self.frame.x,
            self.cursor.y + m.rule_offset,
            self.frame.width,
            self.palette.primary,
            m.rule_width,
        )
        self.cursor.advance(m.heading_gap)

    def end_section(self) -> None:
        self.cursor.advance(self.metrics.section_gap)

    def prose(self, text: str) -> None:
        """Wrapped body paragraph."""
        m = self.metrics
        lines = self.wrap(text, FONT_REGULAR, m.body_size)
        self.draw_block(lines, self.frame.x, FONT_REGULAR, m.body_size, m.line_height, self.palette.text)

    def bullet(self, text: str, bold: bool = False) -> None:
        """Wrapped bullet with a hanging indent."""
        m = self.metrics
        font = FONT_BOLD if bold else FONT_REGULAR
        lines = self.wrap(text, font, m.body_size, indent=m.bullet_indent)
        self.draw_block(
            lines,
            self.frame.x + m.bullet_indent,
            font,
            m.body_size,
            m.line_height,
            self.palette.text,
            glyph_x=self.frame.x,
        )

    def detail(self, text: str, font: str = FONT_REGULAR, color: Optional[str] = None) -> None:
        """Indented secondary text at the detail size (issuer | date, descriptions)."""
        m = self.metrics
        lines = self.wrap(text, font, m.detail_size, indent=m.detail_indent)
        self.draw_block(
            lines,
            self.frame.x + m.detail_indent,
            font,
            m.detail_size,
            m.detail_height,
            color or self.palette.text,
        )

    def labeled_line(self, label: str, value: str) -> None:
        """Indented "Label: value" detail line (e.g., "Field: Computer Science")."""
        self.detail(f"{label}: {value}")

    def title_line(self, text: str, font: str, size: float, color: str) -> None:
        """Entry title/subtitle (position, degree, company | period)."""
        lines = self.wrap(text, font, size)
        self.draw_block(lines, self.frame.x, font, size, self.metrics.title_height, color)

    # =========================================================================
    # Height estimates (used to keep multi-line entry headers together)
    # =========================================================================

    def _bullet_height(self, text: str, bold: bool = False) -> float:
        m = self.metrics
        font = FONT_BOLD if bold else FONT_REGULAR
        return len(self.wrap(text, font, m.body_size, indent=m.bullet_indent)) * m.line_height

    def _detail_height(self, text: str, font: str = FONT_REGULAR) -> float:
        m = self.metrics
        return len(self.wrap(text, font, m.detail_size, indent=m.detail_indent)) * m.detail_height

    def _title_height(self, text: str, font: str, size: float) -> float:
        return len(self.wrap(text, font, size)) * self.metrics.title_height

    def _reserve(self, height: float) -> None:
        if height <= self.allocator.usable_height:
            self.allocator.ensure_space(height, self.cursor)

    # =========================================================================
    # Sections
    # =========================================================================

    def write_sections(self, data: ResumeData, keys: Iterable[str]) -> List[str]:
        """
        Write the given sections in order, skipping those without content.

        Returns:
            Keys of the sections that were written
        """
        written = []
        for key in keys:
            if has_content(data, key):
                self._writers[key](data)
                written.append(key)
        return written

    def write_contact(self, data: ResumeData) -> None:
        items = list(data.contact_items) + list(data.links)
        if not items:
            return

        self.heading(SECTION_HEADINGS["contact"])
        m = self.metrics
        for item in items:
            lines = self.wrap(item, FONT_REGULAR, m.detail_size)
            self.draw_block(
                lines, self.frame.x, FONT_REGULAR, m.detail_size, m.detail_height, self.palette.text
            )
        self.end_section()

    def write_summary(self, summary: Optional[str]) -> None:
        if not summary or not extract_segments(summary):
            return

        intro, bullets = split_summary(summary)
        self.heading(SECTION_HEADINGS["summary"])
        if intro:
            self.prose(intro)
        for text in bullets:
            self.bullet(text)
        self.end_section()

    def write_simple_list(self, key: str, items: Sequence[str], joined: Optional[bool] = None) -> None:
        """Skills, interests, languages: one joined paragraph, or one bullet per item."""
        items = [item for item in items if item]
        if not items:
            return

        if joined is None:
            joined = self.list_style == "joined"

        self.heading(SECTION_HEADINGS[key])
        if joined:
            self.prose(LIST_SEPARATOR.join(items))
        else:
            for item in items:
                self.bullet(item)
        self.end_section()

    def write_skills(self, skills: Sequence[str]) -> None:
        self.write_simple_list("skills", skills)

    def write_languages(self, languages: Sequence[ListItem]) -> None:
        self.write_simple_list("languages", [item.label for item in languages])

    def write_interests(self, interests: Sequence[str]) -> None:
        # Always a joined line, even in the sidebar layout's main column
        self.write_simple_list("interests", interests, joined=True)

    def write_certifications(self, items: Sequence[ListItem]) -> None:
        self.write_items("certifications", items)

    def write_publications(self, items: Sequence[ListItem]) -> None:
        self.write_items("publications", items)

    def write_awards(self, items: Sequence[ListItem]) -> None:
        self.write_items("awards", items)

    def write_experience(self, entries: Sequence[ExperienceEntry]) -> None:
        if not entries:
            return

        m = self.metrics
        self.heading(SECTION_HEADINGS["experience"])
        for index, entry in enumerate(entries):
            if index:
                self.gap(m.entry_gap)

            subtitle = " | ".join(part for part in (entry.company, entry.period) if part)
            segments = extract_segments(entry.description)

            # Keep the header with its first bullet
            header_height = self._title_height(entry.role, FONT_BOLD, m.title_size)
            if subtitle:
                header_height += self._title_height(subtitle, FONT_ITALIC, m.body_size)
            if segments:
                header_height += self._bullet_height(segments[0])
            self._reserve(header_height)

            self.title_line(entry.role, FONT_BOLD, m.title_size, self.palette.secondary)
            if subtitle:
                self.title_line(subtitle, FONT_ITALIC, m.body_size, self.palette.text)

            for segment in segments:
                self.bullet(segment)
        self.end_section()

    def write_education(self, entries: Sequence[EducationEntry]) -> None:
        if not entries:
            return

        m = self.metrics
        self.heading(SECTION_HEADINGS["education"])
        for index, entry in enumerate(entries):
            if index:
                self.gap(m.entry_gap - 1)

            subtitle = " | ".join(part for part in (entry.school_name, entry.period) if part)

            header_height = self._title_height(entry.degree, FONT_BOLD, m.title_size)
            if subtitle:
                header_height += self._title_height(subtitle, FONT_ITALIC, m.body_size)
            if entry.field:
                header_height += self._detail_height(f"Field: {entry.field}")
            self._reserve(header_height)

            self.title_line(entry.degree, FONT_BOLD, m.title_size, self.palette.secondary)
            if subtitle:
                self.title_line(subtitle, FONT_ITALIC, m.body_size, self.palette.text)
            if entry.field:
                self.labeled_line("Field", entry.field)
        self.end_section()

    def write_items(self, key: str, items: Sequence[ListItem]) -> None:
        """
        Certifications, publications, awards.

        Plain strings render as one bullet. Structured items render the title as
        a bold bullet plus an indented "issuer | date" line when either is known.
        """
        if not items:
            return

        self.heading(SECTION_HEADINGS[key])
        for item in items:
            if item.kind == "plain":
                self.bullet(item.label, bold=True)
                continue

            detail = item.detail_line
            height = self._bullet_height(item.label, bold=True)
            if detail:
                height += self._detail_height(detail)
            self._reserve(height)

            self.bullet(item.label, bold=True)
            if detail:
                self.detail(detail)
        self.end_section()

    def write_projects(self, entries: Sequence[ProjectEntry]) -> None:
        if not entries:
            return

        self.heading(SECTION_HEADINGS["projects"])
        for entry in entries:
            # Projects are single paragraphs; bullets inside are flattened
            description = strip_html(entry.description)
            height = self._bullet_height(entry.name, bold=True)
            if description:
                height += self._detail_height(description)
            self._reserve(height)

            self.bullet(entry.name, bold=True)
            if description:
                self.detail(description)
            if entry.url:
                self.detail(strip_scheme(entry.url), color=self.palette.primary)
        self.end_section()

    def write_volunteer(self, entries: Sequence[VolunteerEntry]) -> None:
        if not entries:
            return

        self.heading(SECTION_HEADINGS["volunteer_work"])
        for entry in entries:
            headline = entry.organization or entry.role
            role = entry.role if entry.organization else ""
            description = strip_html(entry.description)

            height = self._bullet_height(headline, bold=True)
            if role:
                height += self._detail_height(role, FONT_ITALIC)
            self._reserve(height)

            self.bullet(headline, bold=True)
            if role:
                self.detail(role, font=FONT_ITALIC)
            if description:
                self.detail(description)
        self.end_section()
