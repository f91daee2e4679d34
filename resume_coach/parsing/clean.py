from __future__ import annotations

import re

_PAGE_MARKER_RE = re.compile(r"Page \d+ of \d+", re.IGNORECASE)
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def clean_resume_text(raw: str | None) -> str:
    """Drop page markers and blank lines, and trim every remaining line."""
    if not raw:
        return ""
    text = raw.replace("\r\n", "\n")
    text = _PAGE_MARKER_RE.sub("", text)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    return "\n".join(line.strip() for line in text.split("\n") if line.strip())
