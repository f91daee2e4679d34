from __future__ import annotations

from dataclasses import dataclass

TAILORING_SECTION_NAMES: tuple[str, ...] = (
    "Professional Summary",
    "Summary",
    "Experience",
    "Work Experience",
    "Employment History",
    "Education",
    "Skills",
    "Technical Skills",
    "Projects",
    "Certifications",
    "Awards",
    "Languages",
)

DEFAULT_SECTION_NAME = "Header"
MAX_HEADING_CHARS = 50


@dataclass(frozen=True)
class ResumeSection:
    name: str
    content: str


def _match_section_name(line: str) -> str | None:
    lowered = line.strip().lower()
    for name in TAILORING_SECTION_NAMES:
        if name.lower() in lowered:
            return name
    return None


def parse_resume_into_sections(content: str) -> list[ResumeSection]:
    """Split resume text into named sections for per-section tailoring.

    A short line mentioning a known section name starts a new section; text
    before the first one lands in ``Header``. Sections without content are
    skipped.
    """
    sections: list[ResumeSection] = []
    current_name = DEFAULT_SECTION_NAME
    current_lines: list[str] = []

    for line in (content or "").split("\n"):
        matched = _match_section_name(line)
        if matched and len(line.strip()) < MAX_HEADING_CHARS:
            body = "".join(current_lines)
            if body.strip():
                sections.append(ResumeSection(name=current_name, content=body))
            current_name = matched
            current_lines = []
        else:
            current_lines.append(line + "\n")

    body = "".join(current_lines)
    if body.strip():
        sections.append(ResumeSection(name=current_name, content=body))
    return sections
