"""
Rendering Context

Responsibilities:
- Paginates resume sections into single-column or two-column A4 pages
- Keeps bullets and entry headers whole across page breaks
- Produces PDF bytes, data URLs for preview, or files on disk
- Reads rendered PDFs back to diagnose layout problems

Owns: Typesetting, page allocation, layouts, output
Never: Modifies resume content
"""

from folio.contexts.rendering.defaults import Layout
from folio.contexts.rendering.generator import RenderedResume, generate_resume_pdf, render_resume
from folio.contexts.rendering.output import resume_filename, save_pdf, to_data_url

__all__ = [
    "Layout",
    "RenderedResume",
    "render_resume",
    "generate_resume_pdf",
    "resume_filename",
    "save_pdf",
    "to_data_url",
]
