from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Literal

from resume_coach.core.layout_config import get_layout_value
from resume_coach.layout.models import LineRole

Alignment = Literal["left", "center"]
StyleTarget = Literal["pdf", "docx"]


@dataclass(frozen=True)
class RoleStyle:
    font_size: float | None = None
    bold: bool = False
    align: Alignment = "left"
    grey: int = 0
    space_before: float = 0.0
    space_after: float = 0.0
    style: str | None = None


_PDF_DEFAULTS: dict[LineRole, RoleStyle] = {
    LineRole.NAME: RoleStyle(font_size=18, bold=True, align="center", space_after=28),
    LineRole.JOB_TITLE_HEADING: RoleStyle(font_size=12, bold=True, align="center", grey=60, space_after=22),
    LineRole.CONTACT_INFO: RoleStyle(font_size=10, align="center", grey=60, space_after=17),
    LineRole.SECTION_HEADER: RoleStyle(font_size=13, bold=True, space_before=14, space_after=22),
    LineRole.EXPERIENCE_ENTRY_HEADING: RoleStyle(font_size=11, bold=True),
    LineRole.BULLET: RoleStyle(font_size=10),
    LineRole.BODY: RoleStyle(font_size=10),
}

_DOCX_DEFAULTS: dict[LineRole, RoleStyle] = {
    LineRole.NAME: RoleStyle(style="Title", align="center", space_after=5),
    LineRole.JOB_TITLE_HEADING: RoleStyle(font_size=12, bold=True, align="center", space_after=5),
    LineRole.CONTACT_INFO: RoleStyle(font_size=10, align="center", space_after=10),
    LineRole.SECTION_HEADER: RoleStyle(style="Heading 1", space_before=10, space_after=5),
    LineRole.EXPERIENCE_ENTRY_HEADING: RoleStyle(bold=True, space_before=5, space_after=2.5),
    LineRole.BULLET: RoleStyle(style="List Bullet", space_after=2.5),
    LineRole.BODY: RoleStyle(space_after=5),
}

_STYLE_FIELDS = {f.name for f in fields(RoleStyle)}


def _merge(default: RoleStyle, overrides: Any) -> RoleStyle:
    if not isinstance(overrides, dict):
        return default
    values = {key: value for key, value in overrides.items() if key in _STYLE_FIELDS}
    merged = {f.name: getattr(default, f.name) for f in fields(RoleStyle)}
    merged.update(values)
    if merged["align"] not in ("left", "center"):
        merged["align"] = "left"
    return RoleStyle(**merged)


def load_role_styles(target: StyleTarget) -> dict[LineRole, RoleStyle]:
    defaults = _PDF_DEFAULTS if target == "pdf" else _DOCX_DEFAULTS
    return {
        role: _merge(style, get_layout_value(f"{target}.roles.{role.value}"))
        for role, style in defaults.items()
    }
