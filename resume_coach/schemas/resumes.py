from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TipType = Literal["good", "improve"]


def clamp_score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, score))


class FeedbackTip(BaseModel):
    type: TipType = "improve"
    tip: str = ""
    explanation: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> str:
        return "good" if str(value or "").strip().lower() == "good" else "improve"


class FeedbackCategory(BaseModel):
    score: int = Field(default=0, ge=0, le=100)
    tips: list[FeedbackTip] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)


class Feedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    overall_score: int = Field(default=0, ge=0, le=100, alias="overallScore")
    ats: FeedbackCategory = Field(default_factory=FeedbackCategory, alias="ATS")
    tone_and_style: FeedbackCategory = Field(default_factory=FeedbackCategory, alias="toneAndStyle")
    content: FeedbackCategory = Field(default_factory=FeedbackCategory)
    structure: FeedbackCategory = Field(default_factory=FeedbackCategory)
    skills: FeedbackCategory = Field(default_factory=FeedbackCategory)

    @field_validator("overall_score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return clamp_score(value)


class ResumeRecord(BaseModel):
    id: str
    filename: str = ""
    company_name: str = ""
    job_title: str = ""
    job_description: str = ""
    resume_text: str
    feedback: Feedback | None = None
    original_resume_id: str | None = None
    is_enhanced: bool = False
    is_generated: bool = False
    parsing_warnings: list[str] = Field(default_factory=list)
    created_at: datetime


class ResumeSummary(BaseModel):
    id: str
    filename: str = ""
    company_name: str = ""
    job_title: str = ""
    overall_score: int | None = None
    is_enhanced: bool = False
    is_generated: bool = False
    created_at: datetime


class ResumeTextRequest(BaseModel):
    resume_text: str = Field(min_length=1, max_length=50000)
    company_name: str = Field(default="", max_length=200)
    job_title: str = Field(default="", max_length=200)
    job_description: str = Field(default="", max_length=50000)


class AnalyzeRequest(BaseModel):
    job_title: str | None = Field(default=None, max_length=200)
    job_description: str | None = Field(default=None, max_length=50000)
    model: str | None = None


class EnhanceRequest(BaseModel):
    model: str | None = None


class PersonalInfo(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(default="", max_length=200)
    phone: str = Field(default="", max_length=50)
    location: str = Field(default="", max_length=200)
    linkedin: str | None = Field(default=None, max_length=300)
    portfolio: str | None = Field(default=None, max_length=300)


class ExperienceEntry(BaseModel):
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""


class EducationEntry(BaseModel):
    degree: str = ""
    institution: str = ""
    year: str = ""


class CreateResumeRequest(BaseModel):
    personal_info: PersonalInfo
    experience: list[ExperienceEntry] = Field(default_factory=list, max_length=30)
    education: list[EducationEntry] = Field(default_factory=list, max_length=20)
    skills: list[str] = Field(default_factory=list, max_length=100)
    job_title: str | None = Field(default=None, max_length=200)
    job_description: str | None = Field(default=None, max_length=50000)
    model: str | None = None
