from __future__ import annotations

import hashlib
import logging
from io import BytesIO
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from .clean import clean_resume_text
from .models import ParsedPage, ParsedResume

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"
ZIP_MAGIC = b"PK\x03\x04"


def _compute_doc_id(text: str, filename: str) -> str:
    seed = text if text.strip() else filename
    digest = hashlib.sha256(seed.encode("utf-8", errors="ignore")).hexdigest()
    return digest[:16]


def _parse_txt(content: bytes) -> tuple[str, list[ParsedPage], list[str]]:
    text = content.decode("utf-8", errors="replace")
    return text, [], []


def _parse_pdf(content: bytes) -> tuple[str, list[ParsedPage], list[str]]:
    warnings: list[str] = []
    pages: list[ParsedPage] = []

    if not content.startswith(PDF_MAGIC):
        raise ValueError("File does not look like a PDF document.")

    try:
        reader = PdfReader(BytesIO(content))
        text_parts: list[str] = []
        for index, page in enumerate(reader.pages, start=1):
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
                pages.append(ParsedPage(page=index, text=page_text))
        if not text_parts:
            warnings.append("No extractable text found in PDF.")
        return "\n".join(text_parts), pages, warnings
    except Exception as exc:
        logger.warning("resume_pdf_parse_failed: %s", exc)
        warnings.append(f"PDF parsing failed: {exc}")
        return "", pages, warnings


def _parse_docx(content: bytes) -> tuple[str, list[ParsedPage], list[str]]:
    warnings: list[str] = []

    if not content.startswith(ZIP_MAGIC):
        raise ValueError("File does not look like a DOCX document.")

    try:
        document = Document(BytesIO(content))
        paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
        if not paragraphs:
            warnings.append("No extractable text found in DOCX.")
        return "\n".join(paragraphs), [], warnings
    except Exception as exc:
        logger.warning("resume_docx_parse_failed: %s", exc)
        warnings.append(f"DOCX parsing failed: {exc}")
        return "", [], warnings


_PARSERS = {
    "txt": _parse_txt,
    "md": _parse_txt,
    "pdf": _parse_pdf,
    "docx": _parse_docx,
}


def supported_extensions() -> list[str]:
    return sorted(_PARSERS)


def parse_resume_bytes(filename: str, content: bytes) -> ParsedResume:
    """Extract and clean resume text from an uploaded file."""
    extension = Path(filename or "").suffix.lower().lstrip(".")
    parser = _PARSERS.get(extension)
    if parser is None:
        raise ValueError(
            f"Unsupported file type '.{extension}'. Supported types: "
            + ", ".join(f".{ext}" for ext in supported_extensions())
        )
    if not content:
        raise ValueError("Uploaded file is empty.")

    raw_text, pages, warnings = parser(content)
    text = clean_resume_text(raw_text)
    source_type = "txt" if extension == "md" else extension
    return ParsedResume(
        doc_id=_compute_doc_id(text=text, filename=filename),
        source_type=source_type,
        filename=filename,
        text=text,
        pages=pages,
        parsing_warnings=warnings,
    )


def parse_resume_file(file_path: str) -> ParsedResume:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input document not found: '{path}'")
    return parse_resume_bytes(path.name, path.read_bytes())
