"""Heuristic resume line classifier.

Turns flat resume text into a :class:`LayoutPlan` shared by the PDF and
DOCX renderers. Rules are evaluated top to bottom per line and the first
match wins; the classifier never raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from .catalog import (
    BULLET_MARKERS,
    BULLET_PREFIX_RE,
    CONTACT_INFO_MAX_POSITION,
    HEADER_PLACEHOLDER,
    JOB_TITLE_MAX_POSITION,
    SEPARATOR_LINES,
    has_contact_marker,
    is_experience_section,
    looks_like_entry_heading,
    match_section_header,
)
from .models import ClassifiedLine, LayoutPlan, LineRole

_PORTFOLIO_PATTERNS = (
    re.compile(r"\|\s*Portfolio\s*", re.IGNORECASE),
    re.compile(r"Portfolio\s*\|", re.IGNORECASE),
    re.compile(r"\bPortfolio\b", re.IGNORECASE),
)
_REPEATED_PIPES_RE = re.compile(r"\|(\s*\|)+")
_EDGE_PIPE_RE = re.compile(r"^\s*\||\|\s*$")
_MULTI_SPACE_RE = re.compile(r"[ \t]{2,}")


@dataclass(frozen=True)
class ClassifierState:
    section_context: str = ""
    name_seen: bool = False


def normalize_line(line: str) -> str | None:
    """Strip markdown and bullet artifacts; ``None`` means the line is dropped."""
    text = line.strip()
    if text in SEPARATOR_LINES:
        return None
    if text.startswith("• "):
        text = text[2:].strip()
    text = text.replace("*", "").strip()
    if not text or text.lower() == HEADER_PLACEHOLDER:
        return None
    return text


def clean_contact_line(text: str) -> str:
    cleaned = text
    for pattern in _PORTFOLIO_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    cleaned = _REPEATED_PIPES_RE.sub("|", cleaned)
    previous = None
    while previous != cleaned:
        previous = cleaned
        cleaned = _EDGE_PIPE_RE.sub("", cleaned).strip()
    return _MULTI_SPACE_RE.sub(" ", cleaned)


def classify_line(
    state: ClassifierState, raw: str, text: str, position: int
) -> tuple[ClassifierState, list[ClassifiedLine]]:
    """Classify one normalized line, returning the next state and the emitted records."""

    def record(role: LineRole, normalized: str, context: str | None = None) -> ClassifiedLine:
        return ClassifiedLine(
            raw_text=raw,
            normalized_text=normalized,
            role=role,
            section_context=state.section_context if context is None else context,
            position_index=position,
        )

    if not state.name_seen:
        return replace(state, name_seen=True), [record(LineRole.NAME, text)]

    entry = match_section_header(text)
    if entry is not None:
        label, _, trailing = text.partition(":")
        emitted = [record(LineRole.SECTION_HEADER, label.strip(), entry)]
        trailing = trailing.strip()
        if trailing:
            emitted.append(
                ClassifiedLine(
                    raw_text=trailing,
                    normalized_text=trailing,
                    role=LineRole.BODY,
                    section_context=entry,
                    position_index=position,
                )
            )
        return replace(state, section_context=entry), emitted

    contact_like = has_contact_marker(text)
    if position < JOB_TITLE_MAX_POSITION and not contact_like:
        return state, [record(LineRole.JOB_TITLE_HEADING, text)]

    if position < CONTACT_INFO_MAX_POSITION and contact_like:
        return state, [record(LineRole.CONTACT_INFO, clean_contact_line(text))]

    if is_experience_section(state.section_context) and looks_like_entry_heading(text):
        return state, [record(LineRole.EXPERIENCE_ENTRY_HEADING, text)]

    if text.startswith(BULLET_MARKERS):
        bullet_text = BULLET_PREFIX_RE.sub("", text, count=1).strip()
        return state, [record(LineRole.BULLET, bullet_text)]

    return state, [record(LineRole.BODY, text)]


def classify_resume(text: str | None) -> LayoutPlan:
    """Classify every non-blank line of ``text`` into a :class:`LayoutPlan`."""
    if not text:
        return LayoutPlan()

    state = ClassifierState()
    records: list[ClassifiedLine] = []
    non_blank = [line for line in text.split("\n") if line.strip()]
    for position, raw in enumerate(non_blank):
        normalized = normalize_line(raw)
        if normalized is None:
            continue
        state, emitted = classify_line(state, raw.strip(), normalized, position)
        records.extend(emitted)
    return LayoutPlan(lines=tuple(records))
