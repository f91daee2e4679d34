from .base import ExportedDocument, ExportFormat, Renderer
from .docx_renderer import DocxRenderer
from .pdf_renderer import PdfRenderer
from .service import build_layout_plan, export_resume, get_renderer

__all__ = [
    "ExportedDocument",
    "ExportFormat",
    "Renderer",
    "DocxRenderer",
    "PdfRenderer",
    "build_layout_plan",
    "export_resume",
    "get_renderer",
]
