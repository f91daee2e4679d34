import os
import sys
import tempfile
import unittest
import zipfile
from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

from docx import Document
from pypdf import PdfReader
from reportlab.lib.pagesizes import A4
from reportlab.pdfbase.pdfmetrics import stringWidth

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_coach.core.layout_config import reset_layout_config_cache  # noqa: E402
from resume_coach.export import ExportFormat, export_resume, get_renderer  # noqa: E402
from resume_coach.export.pdf_renderer import BULLET_GLYPH, FONT_BOLD, FONT_REGULAR, _PageWriter  # noqa: E402
from resume_coach.export.styles import load_role_styles  # noqa: E402
from resume_coach.export.text import export_basename, fold_punctuation, to_latin1  # noqa: E402
from resume_coach.layout import LineRole  # noqa: E402

RESUME = (
    "Header\n"
    "Jane Roe\n"
    "Platform Engineer\n"
    "jane@example.com | 555-123-4567\n"
    "SUMMARY\n"
    "Engineer with “smart” quotes — and dashes.\n"
    "EXPERIENCE\n"
    "Acme Corp | Staff Engineer\n"
    "- Cut deploy time by 40%\n"
    "SKILLS: Python, Go"
)


class ExportTextTests(unittest.TestCase):
    def test_fold_punctuation(self):
        self.assertEqual(fold_punctuation("“A” – ‘b’ •"), '"A" - \'b\' -')

    def test_to_latin1_drops_unencodable(self):
        self.assertEqual(to_latin1("Café ☃"), "Café")

    def test_export_basename(self):
        self.assertEqual(export_basename(RESUME), "Jane_Roe")
        self.assertEqual(export_basename("header\n\n  "), "Resume")
        self.assertEqual(export_basename("Jörg Müller-Smith"), "Jorg_Muller-Smith")
        self.assertEqual(len(export_basename("A" * 80)), 30)


class ExportServiceTests(unittest.TestCase):
    def test_pdf_export(self):
        document = export_resume(RESUME, "pdf")
        self.assertTrue(document.content.startswith(b"%PDF"))
        self.assertEqual(document.filename, "Jane_Roe.pdf")
        self.assertEqual(document.media_type, "application/pdf")

    def test_pdf_paginates_long_resumes(self):
        long_resume = "Jane Roe\nEXPERIENCE\n" + "\n".join(
            f"- Delivered project number {i} with a long description that wraps across the line"
            for i in range(150)
        )
        document = export_resume(long_resume, ExportFormat.PDF)
        self.assertGreater(len(PdfReader(BytesIO(document.content)).pages), 1)

    def test_docx_export_uses_role_styles(self):
        document = export_resume(RESUME, ExportFormat.DOCX)
        self.assertEqual(document.filename, "Jane_Roe.docx")
        self.assertTrue(zipfile.is_zipfile(BytesIO(document.content)))

        parsed = Document(BytesIO(document.content))
        by_text = {p.text: p for p in parsed.paragraphs}
        self.assertEqual(by_text["Jane Roe"].style.name, "Title")
        self.assertEqual(by_text["SUMMARY"].style.name, "Heading 1")
        self.assertEqual(by_text["Cut deploy time by 40%"].style.name, "List Bullet")
        self.assertIn("Python, Go", by_text)
        self.assertNotIn("Header", by_text)

    def test_empty_resume_is_rejected(self):
        with self.assertRaises(ValueError):
            export_resume("  \n", "pdf")

    def test_unknown_format_is_rejected(self):
        with self.assertRaises(ValueError):
            get_renderer("rtf")
        self.assertEqual(get_renderer(" PDF ").extension, "pdf")

    def test_lines_without_text_still_render(self):
        text = "Jane Roe\nPortfolio |\nSKILLS\n-\nPython"
        pdf = export_resume(text, ExportFormat.PDF)
        self.assertTrue(pdf.content.startswith(b"%PDF"))

        docx = export_resume(text, ExportFormat.DOCX)
        paragraphs = Document(BytesIO(docx.content)).paragraphs
        bullets = [p for p in paragraphs if p.style.name == "List Bullet"]
        self.assertEqual([p.text for p in bullets], [""])


class PdfPageWriterTests(unittest.TestCase):
    def test_wrapped_bullets_stay_inside_right_margin(self):
        pdf = MagicMock()
        writer = _PageWriter(pdf, A4)
        style = load_role_styles("pdf")[LineRole.BULLET]
        writer.bullet("Shipped the reporting pipeline " * 12, style)

        font = FONT_BOLD if style.bold else FONT_REGULAR
        size = style.font_size or 10
        right_edge = A4[0] - writer.margin
        chunks = [call.args for call in pdf.drawString.call_args_list if call.args[2] != BULLET_GLYPH]
        self.assertGreater(len(chunks), 1)
        for x, _y, chunk in chunks:
            self.assertLessEqual(x + stringWidth(chunk, font, size), right_edge + 0.01)


class RoleStyleTests(unittest.TestCase):
    def tearDown(self):
        os.environ.pop("LAYOUT_CONFIG_PATH", None)
        reset_layout_config_cache()

    def test_bundled_config_styles(self):
        reset_layout_config_cache()
        pdf = load_role_styles("pdf")
        self.assertEqual(pdf[LineRole.NAME].align, "center")
        self.assertTrue(pdf[LineRole.NAME].bold)
        docx = load_role_styles("docx")
        self.assertEqual(docx[LineRole.BULLET].style, "List Bullet")

    def test_overrides_merge_with_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "layout.yaml"
            path.write_text("pdf:\n  roles:\n    body:\n      font_size: 9\n      align: sideways\n", encoding="utf-8")
            os.environ["LAYOUT_CONFIG_PATH"] = str(path)
            reset_layout_config_cache()

            styles = load_role_styles("pdf")
            self.assertEqual(styles[LineRole.BODY].font_size, 9)
            self.assertEqual(styles[LineRole.BODY].align, "left")
            self.assertEqual(styles[LineRole.NAME].font_size, 18)

    def test_missing_config_falls_back_to_defaults(self):
        os.environ["LAYOUT_CONFIG_PATH"] = "/nonexistent/layout.yaml"
        reset_layout_config_cache()
        styles = load_role_styles("docx")
        self.assertEqual(styles[LineRole.SECTION_HEADER].style, "Heading 1")

    def test_invalid_config_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "layout.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            os.environ["LAYOUT_CONFIG_PATH"] = str(path)
            reset_layout_config_cache()
            with self.assertRaises(RuntimeError):
                load_role_styles("pdf")


if __name__ == "__main__":
    unittest.main()
