"""
Layout diagnostics for rendered resume PDFs.

Reads a rendered PDF back with pdfplumber and compares it against the
ResumeData it was rendered from:

- Every section with content has its heading on a line of its own, in the
  column its layout puts it in (sidebar or main).
- Sections without content have no heading anywhere.
- Two-column layouts carry the sidebar background on every page, including
  pages appended because only the main column overflowed.
- Optionally, the page count matches an expected value.

Known limitation - heading lookalikes:
    Headings are matched as whole normalized lines, so a body line consisting
    only of heading text (e.g., a skill literally named "Languages") is
    indistinguishable from the heading itself.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from folio.contexts.profile.resume_data_structure import ResumeData
from folio.contexts.rendering.config_resolver import LayoutSettings, resolve_settings
from folio.contexts.rendering.defaults import Layout
from folio.contexts.rendering.layouts import SECTION_ORDER, SIDEBAR_SECTIONS
from folio.contexts.rendering.logger import _log_debug, log_validation_result
from folio.contexts.rendering.sections import SECTION_HEADINGS, has_content
from folio.utils.pdf_processing import PDFDocument, PDFSource

MM_TO_PT = 72 / 25.4

# Allowed difference between the drawn and the expected sidebar rectangle (points)
RECT_TOLERANCE = 1.0

REGIONS = {
    Layout.SINGLE: {"main": 0},
    Layout.TWO_COLUMN: {"sidebar": 0, "main": 1},
}


class IssueTemplates:
    """Centralized issue message templates (f-string style)."""

    # Document-level
    PAGE_COUNT_MISMATCH = "Page count mismatch: {actual} (expected {expected})"

    # Page-level
    SIDEBAR_MISSING = "Sidebar background missing on page {page}"

    # Section-level
    HEADING_NOT_FOUND = "'{heading}' ({region}): heading not found"
    HEADING_WRONG_REGION = "'{heading}': heading found in {found} (expected {region})"
    UNEXPECTED_HEADING = "'{heading}': heading rendered on page {page} but section has no content"


# =============================================================================
# Diagnostics Hierarchy
# =============================================================================


@dataclass
class Diagnostics:
    """Base class for hierarchical diagnostics."""

    components: List["Diagnostics"] = field(default_factory=list)

    def get_issues(self) -> List[str]:
        """Generate issues for this level based on field values. Override in subclasses."""
        return []

    def get_inherited_issues(self) -> List[str]:
        """Collect issues from this level and all descendants."""
        all_issues = list(self.get_issues())
        for component in self.components:
            all_issues.extend(component.get_inherited_issues())
        return all_issues

    @property
    def is_valid(self) -> bool:
        """True if no issues at this level or any descendant."""
        return len(self.get_inherited_issues()) == 0


@dataclass
class SectionDiagnostics(Diagnostics):
    """Diagnostics for a single section heading."""

    section_key: str = ""
    heading: str = ""
    region_name: str = ""
    expected: bool = True
    found_page: Optional[int] = None
    found_region: Optional[str] = None

    def get_issues(self) -> List[str]:
        issues = []
        if self.expected and self.found_page is None:
            issues.append(
                IssueTemplates.HEADING_NOT_FOUND.format(heading=self.heading, region=self.region_name)
            )
        elif self.expected and self.found_region != self.region_name:
            issues.append(
                IssueTemplates.HEADING_WRONG_REGION.format(
                    heading=self.heading,
                    found=self.found_region,
                    region=self.region_name,
                )
            )
        elif not self.expected and self.found_page is not None:
            issues.append(
                IssueTemplates.UNEXPECTED_HEADING.format(heading=self.heading, page=self.found_page)
            )
        return issues


@dataclass
class PageDiagnostics(Diagnostics):
    """Diagnostics for a single page of the PDF."""

    page_number: int = 0
    sidebar_expected: bool = False
    sidebar_found: bool = False

    def get_issues(self) -> List[str]:
        if self.sidebar_expected and not self.sidebar_found:
            return [IssueTemplates.SIDEBAR_MISSING.format(page=self.page_number)]
        return []


@dataclass
class DocumentDiagnostics(Diagnostics):
    """Top-level diagnostics for the entire document."""

    layout: str = Layout.SINGLE.value
    actual_page_count: int = 0
    expected_page_count: Optional[int] = None  # None = not checked

    def get_issues(self) -> List[str]:
        issues = []
        if self.expected_page_count is not None and self.actual_page_count != self.expected_page_count:
            issues.append(
                IssueTemplates.PAGE_COUNT_MISMATCH.format(
                    actual=self.actual_page_count,
                    expected=self.expected_page_count,
                )
            )
        return issues

    @property
    def pages(self) -> List[PageDiagnostics]:
        return [c for c in self.components if isinstance(c, PageDiagnostics)]

    @property
    def sections(self) -> List[SectionDiagnostics]:
        return [c for c in self.components if isinstance(c, SectionDiagnostics)]


# =============================================================================
# Helper Functions
# =============================================================================


def _section_region(layout: Layout, key: str) -> str:
    if layout is Layout.TWO_COLUMN and key in SIDEBAR_SECTIONS:
        return "sidebar"
    return "main"


def _has_sidebar_rect(pdf: PDFDocument, page: int, settings: LayoutSettings) -> bool:
    """Whether a page carries a filled rectangle matching the sidebar geometry."""
    expected_width = settings.sidebar_width * MM_TO_PT
    expected_height = settings.page_height * MM_TO_PT

    for rect in pdf.get_rects(page):
        if (
            abs(rect.x0) <= RECT_TOLERANCE
            and abs(rect.top) <= RECT_TOLERANCE
            and abs(rect.width - expected_width) <= RECT_TOLERANCE
            and abs(rect.height - expected_height) <= RECT_TOLERANCE
        ):
            return True
    return False


# =============================================================================
# Main Analysis Function
# =============================================================================


def analyze_layout(
    data: Union[ResumeData, Mapping[str, Any]],
    pdf_source: PDFSource,
    layout: Union[Layout, str] = Layout.SINGLE,
    expected_page_count: Optional[int] = None,
    settings: Optional[LayoutSettings] = None,
) -> DocumentDiagnostics:
    """
    Analyze a rendered PDF against the resume data it was rendered from.

    Args:
        data: ResumeData or raw resume mapping
        pdf_source: Path to the PDF, or its bytes
        layout: Layout the PDF was rendered with
        expected_page_count: Also check the page count if given
        settings: Layout settings used for rendering (default: layout defaults)

    Returns:
        DocumentDiagnostics tree. Call .get_inherited_issues() for all issues,
        or .is_valid to check if document passes validation.
    """
    layout = Layout.parse(layout)
    resume = ResumeData.from_dict(data)
    if settings is None:
        settings = resolve_settings(layout)

    regions = REGIONS[layout]
    column_names = {idx: name for name, idx in regions.items()}
    column_splits = (
        [settings.sidebar_width / settings.page_width] if layout is Layout.TWO_COLUMN else None
    )
    pdf = PDFDocument(pdf_source, column_splits=column_splits)

    diagnostics = DocumentDiagnostics(
        layout=layout.value,
        actual_page_count=pdf.page_count,
        expected_page_count=expected_page_count,
    )

    section_keys = SECTION_ORDER
    if layout is Layout.TWO_COLUMN:
        section_keys = ("contact",) + SECTION_ORDER

    for key in section_keys:
        heading = SECTION_HEADINGS[key]
        section_diagnostics = SectionDiagnostics(
            section_key=key,
            heading=heading,
            region_name=_section_region(layout, key),
            expected=has_content(resume, key),
        )

        matches = pdf.find_all(heading, whole_line=True)
        if matches:
            # Prefer a match in the expected column
            expected_column = regions[section_diagnostics.region_name]
            page, column, _ = next(
                (m for m in matches if m[1] == expected_column),
                matches[0],
            )
            section_diagnostics.found_page = page
            section_diagnostics.found_region = column_names.get(column, f"column {column}")

        _log_debug(
            f"Section '{heading}': expected={section_diagnostics.expected} "
            f"found={section_diagnostics.found_region}@{section_diagnostics.found_page}"
        )
        diagnostics.components.append(section_diagnostics)

    for page in range(1, pdf.page_count + 1):
        page_diagnostics = PageDiagnostics(
            page_number=page,
            sidebar_expected=layout is Layout.TWO_COLUMN,
        )
        if page_diagnostics.sidebar_expected:
            page_diagnostics.sidebar_found = _has_sidebar_rect(pdf, page, settings)
        diagnostics.components.append(page_diagnostics)

    return diagnostics


def validate_rendered_resume(
    data: Union[ResumeData, Mapping[str, Any]],
    pdf_source: PDFSource,
    layout: Union[Layout, str] = Layout.SINGLE,
    expected_page_count: Optional[int] = None,
) -> DocumentDiagnostics:
    """
    Run layout diagnostics and log the outcome.

    Example:
        >>> diagnostics = validate_rendered_resume(data, "outs/results/Jane Doe_Resume.pdf")
        >>> if not diagnostics.is_valid:
        ...     print(diagnostics.get_inherited_issues())
    """
    resume = ResumeData.from_dict(data)
    diagnostics = analyze_layout(resume, pdf_source, layout, expected_page_count)
    log_validation_result(resume.full_name or "Resume", diagnostics)
    return diagnostics
