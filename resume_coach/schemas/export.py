from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from resume_coach.layout.models import LayoutPlan, LineRole


class ExportRequest(BaseModel):
    resume_id: str | None = None
    resume_text: str | None = Field(default=None, max_length=50000)

    @model_validator(mode="after")
    def _require_source(self) -> "ExportRequest":
        if not (self.resume_id or (self.resume_text or "").strip()):
            raise ValueError("Either resume_id or resume_text is required.")
        return self


class LayoutLine(BaseModel):
    raw_text: str
    normalized_text: str
    role: LineRole
    section_context: str
    position_index: int


class LayoutPlanResponse(BaseModel):
    name: str | None = None
    sections: list[str] = Field(default_factory=list)
    lines: list[LayoutLine] = Field(default_factory=list)

    @classmethod
    def from_plan(cls, plan: LayoutPlan) -> "LayoutPlanResponse":
        return cls(
            name=plan.name,
            sections=plan.sections(),
            lines=[LayoutLine(**line.to_dict()) for line in plan],
        )
