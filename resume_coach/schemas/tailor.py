from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from resume_coach.schemas.resumes import clamp_score


class JobInfo(BaseModel):
    company_name: str = Field(default="", max_length=200)
    job_title: str = Field(default="", max_length=200)
    job_description: str = Field(min_length=1, max_length=50000)


class JobRequirements(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    technical_skills: list[str] = Field(default_factory=list, alias="technicalSkills")
    soft_skills: list[str] = Field(default_factory=list, alias="softSkills")
    experience_level: str = Field(default="", alias="experienceLevel")
    keywords: list[str] = Field(default_factory=list)
    culture_fit: list[str] = Field(default_factory=list, alias="cultureFit")

    @field_validator("technical_skills", "soft_skills", "keywords", "culture_fit", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(item).strip() for item in value if str(item).strip()]

    @field_validator("experience_level", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class JobFitScore(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    overall: int = Field(default=0, ge=0, le=100)
    keyword_match: int = Field(default=0, ge=0, le=100, alias="keywordMatch")
    skills_match: int = Field(default=0, ge=0, le=100, alias="skillsMatch")
    experience_match: int = Field(default=0, ge=0, le=100, alias="experienceMatch")
    gaps: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)

    @field_validator("overall", "keyword_match", "skills_match", "experience_match", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)

    @field_validator("gaps", "suggestions", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(item) for item in value]


class TailoredSection(BaseModel):
    name: str
    original: str
    tailored: str
    keywords: list[str] = Field(default_factory=list)


class TailoringResult(BaseModel):
    sections: list[TailoredSection] = Field(default_factory=list)
    job_fit_score: JobFitScore
    summary: str

    @property
    def tailored_text(self) -> str:
        return "\n\n".join(f"{section.name}:\n{section.tailored}" for section in self.sections)


class TailorRequest(BaseModel):
    resume_id: str | None = None
    resume_text: str | None = Field(default=None, max_length=50000)
    job: JobInfo
    model: str | None = None

    @model_validator(mode="after")
    def _require_resume(self) -> "TailorRequest":
        if not (self.resume_id or (self.resume_text or "").strip()):
            raise ValueError("Either resume_id or resume_text is required.")
        return self


class JobFitRequest(TailorRequest):
    pass
