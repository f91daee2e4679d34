from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

SUPPORTED_SOURCE_TYPES = ("pdf", "docx", "txt")


class ParsedPage(BaseModel):
    page: int | None = None
    text: str


class ParsedResume(BaseModel):
    doc_id: str
    source_type: str
    filename: str = ""
    text: str
    pages: list[ParsedPage] = Field(default_factory=list)
    parsing_warnings: list[str] = Field(default_factory=list)

    @field_validator("source_type")
    @classmethod
    def _validate_source_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in SUPPORTED_SOURCE_TYPES:
            raise ValueError("source_type must be one of: pdf, docx, txt")
        return normalized
