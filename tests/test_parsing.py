import sys
import tempfile
import unittest
from io import BytesIO
from pathlib import Path

from docx import Document

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_coach.parsing.clean import clean_resume_text  # noqa: E402
from resume_coach.parsing.parse import parse_resume_bytes, parse_resume_file  # noqa: E402


class CleanTextTests(unittest.TestCase):
    def test_drops_page_markers_and_blank_lines(self):
        raw = "John Doe\r\n\r\n\r\n\r\n  Engineer  \nPage 1 of 2\n\nSkills"
        self.assertEqual(clean_resume_text(raw), "John Doe\nEngineer\nSkills")

    def test_empty_input(self):
        self.assertEqual(clean_resume_text(None), "")
        self.assertEqual(clean_resume_text("   \n  "), "")


class ParsingFacadeTests(unittest.TestCase):
    def test_parse_txt_returns_cleaned_resume(self):
        content = "Line one\n\n\n- Bullet item\nLine three"
        tmp_file = tempfile.NamedTemporaryFile("w", suffix=".txt", delete=False, encoding="utf-8")
        tmp_path = Path(tmp_file.name)
        try:
            tmp_file.write(content)
            tmp_file.close()

            parsed = parse_resume_file(str(tmp_path))
            self.assertEqual(parsed.source_type, "txt")
            self.assertEqual(parsed.text, "Line one\n- Bullet item\nLine three")
            self.assertTrue(parsed.doc_id)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    def test_parse_docx_paragraphs(self):
        document = Document()
        document.add_paragraph("Jane Roe")
        document.add_paragraph("")
        document.add_paragraph("EXPERIENCE")
        buffer = BytesIO()
        document.save(buffer)

        parsed = parse_resume_bytes("resume.docx", buffer.getvalue())
        self.assertEqual(parsed.source_type, "docx")
        self.assertEqual(parsed.text, "Jane Roe\nEXPERIENCE")

    def test_markdown_is_treated_as_text(self):
        parsed = parse_resume_bytes("resume.md", b"# Jane Roe\nEngineer")
        self.assertEqual(parsed.source_type, "txt")

    def test_rejects_unsupported_and_empty_files(self):
        with self.assertRaises(ValueError):
            parse_resume_bytes("resume.exe", b"MZ")
        with self.assertRaises(ValueError):
            parse_resume_bytes("resume.txt", b"")

    def test_rejects_pdf_without_magic(self):
        with self.assertRaises(ValueError):
            parse_resume_bytes("resume.pdf", b"not really a pdf")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            parse_resume_file("/nonexistent/resume.txt")


if __name__ == "__main__":
    unittest.main()
