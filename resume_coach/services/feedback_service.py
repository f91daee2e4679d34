from __future__ import annotations

import logging

from pydantic import ValidationError

from resume_coach.schemas.resumes import Feedback, ResumeRecord
from resume_coach.services.llm import ResumeAIError, complete_json_required
from resume_coach.services.prompts import feedback_prompt
from resume_coach.storage.repository import get_resume, save_resume

logger = logging.getLogger(__name__)


def score_resume_text(
    resume_text: str,
    *,
    job_title: str = "",
    job_description: str = "",
    model: str | None = None,
) -> Feedback:
    if not (resume_text or "").strip():
        raise ValueError("Resume text is empty.")

    payload = complete_json_required(
        system_prompt=feedback_prompt(job_title, job_description),
        user_prompt=resume_text,
        model=model,
        task="feedback",
    )
    try:
        return Feedback.model_validate(payload)
    except ValidationError as exc:
        logger.warning("feedback_schema_invalid errors=%s", exc.error_count())
        raise ResumeAIError("The AI feedback did not match the expected format. Try again.", code="llm_invalid") from exc


def analyze_resume(
    resume_id: str,
    *,
    job_title: str | None = None,
    job_description: str | None = None,
    model: str | None = None,
) -> ResumeRecord:
    """Score a stored resume and persist the feedback on its record."""
    record = get_resume(resume_id)
    title = record.job_title if job_title is None else job_title
    description = record.job_description if job_description is None else job_description

    feedback = score_resume_text(
        record.resume_text,
        job_title=title,
        job_description=description,
        model=model,
    )
    updated = record.model_copy(
        update={"feedback": feedback, "job_title": title, "job_description": description}
    )
    save_resume(updated)
    logger.info("resume_analyzed id=%s overall=%s", resume_id, feedback.overall_score)
    return updated
