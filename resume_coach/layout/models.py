from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Iterator


class LineRole(str, Enum):
    """Semantic role of one resume line, as consumed by the renderers."""

    NAME = "name"
    JOB_TITLE_HEADING = "job_title_heading"
    CONTACT_INFO = "contact_info"
    SECTION_HEADER = "section_header"
    EXPERIENCE_ENTRY_HEADING = "experience_entry_heading"
    BULLET = "bullet"
    BODY = "body"


@dataclass(frozen=True)
class ClassifiedLine:
    raw_text: str
    normalized_text: str
    role: LineRole
    section_context: str
    position_index: int

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["role"] = self.role.value
        return payload


@dataclass(frozen=True)
class LayoutPlan:
    """Ordered, renderer-agnostic sequence of classified lines."""

    lines: tuple[ClassifiedLine, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[ClassifiedLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> ClassifiedLine:
        return self.lines[index]

    @property
    def roles(self) -> list[LineRole]:
        return [line.role for line in self.lines]

    @property
    def name(self) -> str | None:
        if self.lines and self.lines[0].role is LineRole.NAME:
            return self.lines[0].normalized_text
        return None

    def sections(self) -> list[str]:
        return [line.section_context for line in self.lines if line.role is LineRole.SECTION_HEADER]
