from __future__ import annotations

import re
import unicodedata

from resume_coach.layout.catalog import HEADER_PLACEHOLDER

_PUNCTUATION_MAP = {
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "•": "-",
    " ": " ",
}
_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_FILENAME_RE = re.compile(r"[^\w.-]")


def fold_punctuation(text: str) -> str:
    return "".join(_PUNCTUATION_MAP.get(char, char) for char in text)


def to_latin1(text: str) -> str:
    """Fold typographic punctuation and drop what the base-14 PDF fonts cannot draw."""
    folded = fold_punctuation(text)
    return folded.encode("latin-1", errors="ignore").decode("latin-1").strip()


def clean_paragraph_text(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", fold_punctuation(text)).strip()


def export_basename(resume_text: str, max_chars: int = 30) -> str:
    """Name the exported file after the first real line of the resume."""
    candidate = "Resume"
    for line in (resume_text or "").split("\n"):
        trimmed = line.strip()
        if trimmed and trimmed.lower() != HEADER_PLACEHOLDER:
            candidate = trimmed
            break

    ascii_name = unicodedata.normalize("NFKD", clean_paragraph_text(candidate))
    ascii_name = ascii_name.encode("ascii", errors="ignore").decode("ascii")
    ascii_name = _WHITESPACE_RE.sub("_", ascii_name)
    ascii_name = _UNSAFE_FILENAME_RE.sub("", ascii_name).strip("._")
    return ascii_name[:max_chars] or "Resume"
