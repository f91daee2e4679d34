from __future__ import annotations

import logging

from resume_coach.core.config import settings
from resume_coach.layout.classifier import classify_resume
from resume_coach.layout.models import LayoutPlan

from .base import ExportedDocument, ExportFormat, Renderer
from .docx_renderer import DocxRenderer
from .pdf_renderer import PdfRenderer
from .text import export_basename

logger = logging.getLogger(__name__)

_RENDERERS: dict[ExportFormat, type[Renderer]] = {
    ExportFormat.PDF: PdfRenderer,
    ExportFormat.DOCX: DocxRenderer,
}


def get_renderer(export_format: str | ExportFormat) -> Renderer:
    if isinstance(export_format, ExportFormat):
        return _RENDERERS[export_format]()
    try:
        key = ExportFormat((export_format or "").strip().lower())
    except ValueError as exc:
        supported = ", ".join(fmt.value for fmt in ExportFormat)
        raise ValueError(f"Unsupported export format '{export_format}'. Supported: {supported}.") from exc
    return _RENDERERS[key]()


def build_layout_plan(resume_text: str) -> LayoutPlan:
    return classify_resume(resume_text)


def export_resume(resume_text: str, export_format: str | ExportFormat) -> ExportedDocument:
    """Classify ``resume_text`` once and render it in the requested format."""
    if not (resume_text or "").strip():
        raise ValueError("No content provided for export.")

    renderer = get_renderer(export_format)
    plan = build_layout_plan(resume_text)
    content = renderer.render(plan)
    filename = f"{export_basename(resume_text, settings.export_filename_max_chars)}.{renderer.extension}"

    logger.info(
        "resume_export format=%s lines=%s bytes=%s",
        renderer.format.value,
        len(plan),
        len(content),
    )
    return ExportedDocument(filename=filename, media_type=renderer.media_type, content=content)
