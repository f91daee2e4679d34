from __future__ import annotations

from io import BytesIO
from typing import Any

from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from resume_coach.core.config import settings
from resume_coach.core.layout_config import get_layout_value
from resume_coach.layout.models import ClassifiedLine, LayoutPlan, LineRole

from .base import ExportFormat, Renderer
from .styles import RoleStyle, load_role_styles
from .text import to_latin1

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
BULLET_GLYPH = "•"


def _pdf_setting(key: str, default: float) -> float:
    value: Any = get_layout_value(f"pdf.{key}", default)
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class _PageWriter:
    """Cursor over a reportlab canvas that paginates as lines are drawn."""

    def __init__(self, pdf: canvas.Canvas, pagesize: tuple[float, float]):
        self.pdf = pdf
        self.width, self.height = pagesize
        self.margin = _pdf_setting("margin", 56)
        self.top = _pdf_setting("top", 56)
        self.bottom_reserve = _pdf_setting("bottom_reserve", 84)
        self.line_height = _pdf_setting("line_height", 17)
        self.bullet_indent = _pdf_setting("bullet_indent", 14)
        self.bullet_text_indent = _pdf_setting("bullet_text_indent", 34)
        self.rule_grey = _pdf_setting("section_rule_grey", 200)
        self.max_width = self.width - 2 * self.margin
        self.y = self.height - self.top
        self.sections_drawn = 0

    def ensure_space(self) -> None:
        if self.y < self.bottom_reserve:
            self.pdf.showPage()
            self.y = self.height - self.top

    def use_style(self, style: RoleStyle) -> str:
        font = FONT_BOLD if style.bold else FONT_REGULAR
        self.pdf.setFont(font, style.font_size or 10)
        self.pdf.setFillGray(max(0, min(255, style.grey)) / 255.0)
        return font

    def centered(self, text: str, style: RoleStyle) -> None:
        font = self.use_style(style)
        size = style.font_size or 10
        for chunk in simpleSplit(text, font, size, self.max_width) or [""]:
            self.ensure_space()
            self.pdf.drawCentredString(self.width / 2, self.y, chunk)
            self.y -= self.line_height
        self.y -= max(0.0, style.space_after - self.line_height)

    def left(self, text: str, style: RoleStyle) -> None:
        font = self.use_style(style)
        size = style.font_size or 10
        for chunk in simpleSplit(text, font, size, self.max_width) or [""]:
            self.ensure_space()
            self.pdf.drawString(self.margin, self.y, chunk)
            self.y -= self.line_height

    def section_header(self, text: str, style: RoleStyle) -> None:
        self.y -= style.space_before
        if self.sections_drawn:
            self.ensure_space()
            self.pdf.setStrokeGray(self.rule_grey / 255.0)
            self.pdf.line(self.margin, self.y + 6, self.width - self.margin, self.y + 6)
            self.y -= 8
        self.ensure_space()
        self.use_style(style)
        self.pdf.drawString(self.margin, self.y, text)
        self.y -= style.space_after
        self.sections_drawn += 1

    def bullet(self, text: str, style: RoleStyle) -> None:
        font = self.use_style(style)
        size = style.font_size or 10
        width = self.max_width - self.bullet_text_indent
        for index, chunk in enumerate(simpleSplit(text, font, size, width) or [""]):
            self.ensure_space()
            if index == 0:
                self.pdf.drawString(self.margin + self.bullet_indent, self.y, BULLET_GLYPH)
            self.pdf.drawString(self.margin + self.bullet_text_indent, self.y, chunk)
            self.y -= self.line_height


class PdfRenderer(Renderer):
    """Page-fixed PDF output drawn directly on a reportlab canvas."""

    format = ExportFormat.PDF
    media_type = "application/pdf"

    def __init__(self, pagesize: tuple[float, float] | None = None):
        if pagesize is None:
            pagesize = A4 if settings.pdf_page_size == "a4" else LETTER
        self._pagesize = pagesize

    def render(self, plan: LayoutPlan) -> bytes:
        styles = load_role_styles("pdf")
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=self._pagesize)
        if plan.name:
            pdf.setTitle(to_latin1(plan.name))
        writer = _PageWriter(pdf, self._pagesize)

        for line in plan:
            self._draw(writer, line, styles[line.role])

        pdf.save()
        return buffer.getvalue()

    @staticmethod
    def _draw(writer: _PageWriter, line: ClassifiedLine, style: RoleStyle) -> None:
        text = to_latin1(line.normalized_text)
        if line.role is LineRole.SECTION_HEADER:
            writer.section_header(text, style)
        elif line.role is LineRole.BULLET:
            writer.bullet(text, style)
        elif style.align == "center":
            writer.centered(text, style)
        else:
            writer.left(text, style)
