from __future__ import annotations

import re

SECTION_HEADER_CATALOG: tuple[str, ...] = (
    "PROFESSIONAL SUMMARY",
    "SUMMARY",
    "PROFILE",
    "OBJECTIVE",
    "EXPERIENCE",
    "WORK EXPERIENCE",
    "EMPLOYMENT HISTORY",
    "PROFESSIONAL EXPERIENCE",
    "EDUCATION",
    "ACADEMIC BACKGROUND",
    "SKILLS",
    "TECHNICAL SKILLS",
    "CORE COMPETENCIES",
    "KEY SKILLS",
    "PROJECTS",
    "KEY PROJECTS",
    "CERTIFICATIONS",
    "CERTIFICATES",
    "LICENSES",
    "AWARDS",
    "HONORS",
    "ACHIEVEMENTS",
    "LANGUAGES",
    "PUBLICATIONS",
    "VOLUNTEER WORK",
)

# The header block of a resume is approximated by line position, not content.
JOB_TITLE_MAX_POSITION = 3
CONTACT_INFO_MAX_POSITION = 5

EXPERIENCE_SECTION_MARKERS: tuple[str, ...] = ("EXPERIENCE", "EMPLOYMENT", "WORK")

SEPARATOR_LINES = frozenset({"• --", "--", "•"})
HEADER_PLACEHOLDER = "header"
BULLET_MARKERS: tuple[str, ...] = ("-", "•", "*")

PHONE_RE = re.compile(r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}")
ENTRY_HEADING_RE = re.compile(r"^[A-Z][a-zA-Z\s,&-]+(\||at|@|-)\s*[A-Z]")
YEAR_RANGE_RE = re.compile(r"^\d{4}\s*-\s*(Present|\d{4})")
BULLET_PREFIX_RE = re.compile(r"^[-•*]\s*")


def match_section_header(text: str) -> str | None:
    """Return the catalog entry ``text`` names, either alone or as ``ENTRY: ...``."""
    upper = text.upper()
    for entry in SECTION_HEADER_CATALOG:
        if upper == entry or upper.startswith(entry + ":"):
            return entry
    return None


def has_contact_marker(text: str) -> bool:
    return "@" in text or "|" in text or bool(PHONE_RE.search(text))


def is_experience_section(section_context: str) -> bool:
    return any(marker in section_context for marker in EXPERIENCE_SECTION_MARKERS)


def looks_like_entry_heading(text: str) -> bool:
    return bool(ENTRY_HEADING_RE.match(text) or YEAR_RANGE_RE.match(text))
