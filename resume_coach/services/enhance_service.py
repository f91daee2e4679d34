from __future__ import annotations

import logging

from resume_coach.parsing.clean import clean_resume_text
from resume_coach.schemas.resumes import CreateResumeRequest, ResumeRecord
from resume_coach.services.llm import ResumeAIError, complete_text
from resume_coach.services.prompts import create_resume_prompt, enhancement_prompt
from resume_coach.storage.repository import create_resume, get_resume

logger = logging.getLogger(__name__)


def _cleaned_reply(text: str) -> str:
    cleaned = clean_resume_text(text)
    if not cleaned:
        raise ResumeAIError("The AI service returned an empty resume. Try again.", code="llm_invalid")
    return cleaned


def enhance_resume(resume_id: str, *, model: str | None = None) -> ResumeRecord:
    """Rewrite a stored resume without adding facts and store it as a new record."""
    original = get_resume(resume_id)
    reply = complete_text(
        user_prompt=enhancement_prompt(
            original.resume_text,
            feedback=original.feedback,
            job_title=original.job_title,
            job_description=original.job_description,
        ),
        model=model,
        task="enhance",
    )
    record = create_resume(
        _cleaned_reply(reply),
        filename=original.filename,
        company_name=original.company_name,
        job_title=original.job_title,
        job_description=original.job_description,
        original_resume_id=original.id,
        is_enhanced=True,
    )
    logger.info("resume_enhanced id=%s original_id=%s", record.id, original.id)
    return record


def generate_resume(request: CreateResumeRequest) -> ResumeRecord:
    reply = complete_text(
        user_prompt=create_resume_prompt(request),
        model=request.model,
        task="create",
    )
    record = create_resume(
        _cleaned_reply(reply),
        filename=f"{request.personal_info.name}.txt",
        job_title=request.job_title or "",
        job_description=request.job_description or "",
        is_generated=True,
    )
    logger.info("resume_generated id=%s", record.id)
    return record
