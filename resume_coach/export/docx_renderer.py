from __future__ import annotations

from io import BytesIO

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt

from resume_coach.core.layout_config import get_layout_value
from resume_coach.layout.models import LayoutPlan

from .base import ExportFormat, Renderer
from .styles import RoleStyle, load_role_styles
from .text import clean_paragraph_text

_ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
}


class DocxRenderer(Renderer):
    """Flow-document output built with python-docx."""

    format = ExportFormat.DOCX
    media_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def render(self, plan: LayoutPlan) -> bytes:
        styles = load_role_styles("docx")
        document = Document()

        margin = Inches(float(get_layout_value("docx.margin_inches", 1.0)))
        for section in document.sections:
            section.top_margin = margin
            section.bottom_margin = margin
            section.left_margin = margin
            section.right_margin = margin

        if plan.name:
            document.core_properties.title = clean_paragraph_text(plan.name)

        for line in plan:
            self._add_paragraph(document, clean_paragraph_text(line.normalized_text), styles[line.role])

        buffer = BytesIO()
        document.save(buffer)
        buffer.seek(0)
        return buffer.read()

    @staticmethod
    def _add_paragraph(document, text: str, style: RoleStyle) -> None:
        if style.style:
            paragraph = document.add_paragraph(style=style.style)
        else:
            paragraph = document.add_paragraph()
        run = paragraph.add_run(text)
        if style.bold:
            run.bold = True
        if style.font_size:
            run.font.size = Pt(style.font_size)

        paragraph.alignment = _ALIGNMENTS.get(style.align, WD_ALIGN_PARAGRAPH.LEFT)
        if style.space_before:
            paragraph.paragraph_format.space_before = Pt(style.space_before)
        if style.space_after:
            paragraph.paragraph_format.space_after = Pt(style.space_after)
