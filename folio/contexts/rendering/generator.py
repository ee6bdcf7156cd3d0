"""
Resume PDF generation.

render_resume() is pure: it resolves settings, runs the layout and returns the
PDF bytes together with the recorded display list. generate_resume_pdf() adds
the output step, either a data URL for preview or a file on disk.
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from dotenv import load_dotenv

from folio.contexts.profile.resume_data_structure import ResumeData
from folio.contexts.rendering.config_resolver import resolve_settings
from folio.contexts.rendering.defaults import Layout
from folio.contexts.rendering.layouts import get_layout
from folio.contexts.rendering.logger import log_render_result, log_render_start
from folio.contexts.rendering.output import resume_filename, save_pdf, to_data_url
from folio.contexts.rendering.typesetting import DrawOp, text_runs
from folio.utils.timestamp import today

load_dotenv()

RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


@dataclass
class RenderedResume:
    """
    Result of rendering a resume.

    Attributes:
        layout: Layout that produced it
        pdf_bytes: Finished PDF document
        page_count: Number of pages
        operations: Recorded draw operations, in page order
        filename: Suggested download name
    """

    layout: Layout
    pdf_bytes: bytes
    page_count: int
    operations: List[DrawOp]
    filename: str

    def text_runs(self, page: Optional[int] = None) -> List[str]:
        """Drawn strings in drawing order, for one page (0-indexed) or all pages."""
        return text_runs(self.operations, page)

    @property
    def data_url(self) -> str:
        return to_data_url(self.pdf_bytes)


def render_resume(
    data: Union[ResumeData, Mapping[str, Any]],
    layout: Union[Layout, str] = Layout.SINGLE,
    presets: Optional[Sequence[str]] = None,
) -> RenderedResume:
    """
    Render resume data to PDF bytes without touching the filesystem.

    Args:
        data: ResumeData or a raw resume mapping
        layout: "single" or "two-column"
        presets: Named layout presets applied in order (see layout_presets.yaml)

    Returns:
        RenderedResume

    Raises:
        ValueError: Unknown layout or preset
        InvalidResumeDataError: data is not resume-shaped
    """
    layout = Layout.parse(layout)
    resume = ResumeData.from_dict(data)
    settings = resolve_settings(layout, presets)

    typesetter = get_layout(layout, settings).render(resume)
    title = f"{resume.full_name} Resume" if resume.full_name else "Resume"
    pdf_bytes = typesetter.render_pdf(title=title, author=resume.full_name)

    return RenderedResume(
        layout=layout,
        pdf_bytes=pdf_bytes,
        page_count=typesetter.page_count,
        operations=typesetter.operations,
        filename=resume_filename(resume.full_name, layout),
    )


def generate_resume_pdf(
    data: Union[ResumeData, Mapping[str, Any]],
    layout: Union[Layout, str] = Layout.SINGLE,
    preview: bool = False,
    output_dir: Optional[Path] = None,
    presets: Optional[Sequence[str]] = None,
) -> Union[str, Path]:
    """
    Render a resume and deliver it.

    Args:
        data: ResumeData or a raw resume mapping
        layout: "single" or "two-column"
        preview: Return a data URL instead of writing a file
        output_dir: Where to write the PDF (default: RESULTS_PATH/<today>)
        presets: Named layout presets applied in order

    Returns:
        Data URL string when preview is set, else the path of the written PDF
    """
    resume = ResumeData.from_dict(data)
    display_name = resume.full_name or "Resume"
    layout = Layout.parse(layout)

    log_render_start(display_name, layout.value, presets)
    start_time = time.time()
    result = render_resume(resume, layout, presets)
    log_render_result(display_name, result, time.time() - start_time)

    if preview:
        return result.data_url

    if output_dir is None:
        output_dir = RESULTS_PATH / today()
    return save_pdf(result.pdf_bytes, result.filename, output_dir)
