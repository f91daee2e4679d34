from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable

from pydantic import ValidationError

from resume_coach.layout.sections import parse_resume_into_sections
from resume_coach.schemas.tailor import (
    JobFitScore,
    JobInfo,
    JobRequirements,
    TailoredSection,
    TailoringResult,
)
from resume_coach.services.llm import complete_json, complete_text
from resume_coach.services.prompts import (
    analyze_job_prompt,
    measure_fit_prompt,
    tailor_section_prompt,
)
from resume_coach.storage.repository import get_resume, save_tailored_result

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[dict[str, Any]], None]


def _fallback_fit_score() -> JobFitScore:
    return JobFitScore(
        overall=0,
        keyword_match=0,
        skills_match=0,
        experience_match=0,
        gaps=["Unable to analyze resume"],
        suggestions=["Please try again"],
    )


def _emit(progress_callback: ProgressCallback | None, message: str, percent: float) -> None:
    if progress_callback is None:
        return
    progress_callback({"message": message, "progress": round(percent, 1)})


def analyze_job(job: JobInfo, *, model: str | None = None) -> JobRequirements:
    payload = complete_json(user_prompt=analyze_job_prompt(job), model=model, task="analyze_job")
    if not payload:
        return JobRequirements()
    try:
        return JobRequirements.model_validate(payload)
    except ValidationError:
        logger.warning("job_requirements_invalid")
        return JobRequirements()


def measure_job_fit(resume_text: str, job: JobInfo, *, model: str | None = None) -> JobFitScore:
    """Score how well ``resume_text`` matches ``job``.

    A reply that cannot be parsed yields the zero score with a retry hint
    instead of an error. Transport failures still raise ``ResumeAIError``.
    """
    if not (resume_text or "").strip():
        raise ValueError("Resume text is empty.")
    payload = complete_json(user_prompt=measure_fit_prompt(resume_text, job), model=model, task="measure_fit")
    if not payload:
        return _fallback_fit_score()
    try:
        return JobFitScore.model_validate(payload)
    except ValidationError:
        logger.warning("job_fit_invalid")
        return _fallback_fit_score()


def tailor_resume_text(
    resume_text: str,
    job: JobInfo,
    *,
    model: str | None = None,
    progress_callback: ProgressCallback | None = None,
) -> TailoringResult:
    if not (resume_text or "").strip():
        raise ValueError("Resume text is empty.")

    started = time.perf_counter()
    _emit(progress_callback, "Analyzing job requirements...", 10)
    requirements = analyze_job(job, model=model)

    _emit(progress_callback, "Tailoring resume sections...", 30)
    sections = parse_resume_into_sections(resume_text)
    if not sections:
        raise ValueError("Resume has no content to tailor.")
    requirements_json = json.dumps(requirements.model_dump(by_alias=True), ensure_ascii=False)

    tailored: list[TailoredSection] = []
    total = len(sections)
    for index, section in enumerate(sections):
        _emit(progress_callback, f"Tailoring {section.name}...", 30 + (index + 1) / total * 40)
        content = complete_text(
            user_prompt=tailor_section_prompt(section.name, section.content, requirements_json),
            model=model,
            task="tailor_section",
        )
        tailored.append(
            TailoredSection(
                name=section.name,
                original=section.content,
                tailored=content,
                keywords=list(requirements.keywords),
            )
        )

    _emit(progress_callback, "Measuring job fit...", 80)
    partial = TailoringResult(sections=tailored, job_fit_score=_fallback_fit_score(), summary="")
    fit = measure_job_fit(partial.tailored_text, job, model=model)

    _emit(progress_callback, "Complete!", 100)
    result = TailoringResult(
        sections=tailored,
        job_fit_score=fit,
        summary=(
            f"Your resume has been tailored for {job.job_title} at {job.company_name}. "
            f"Overall fit score: {fit.overall}%"
        ),
    )
    logger.info(
        json.dumps(
            {
                "event": "resume_tailored",
                "sections": total,
                "overall": fit.overall,
                "duration_ms": int((time.perf_counter() - started) * 1000),
            }
        )
    )
    return result


def tailor_resume(
    job: JobInfo,
    *,
    resume_id: str | None = None,
    resume_text: str | None = None,
    model: str | None = None,
    progress_callback: ProgressCallback | None = None,
) -> TailoringResult:
    """Tailor a stored or inline resume; stored resumes also persist the result."""
    result = tailor_resume_text(
        resolve_resume_text(resume_id, resume_text),
        job,
        model=model,
        progress_callback=progress_callback,
    )
    if resume_id:
        key = save_tailored_result(resume_id, job, result)
        logger.info("tailored_result_saved key=%s", key)
    return result


def resolve_resume_text(resume_id: str | None, resume_text: str | None) -> str:
    if (resume_text or "").strip():
        return resume_text or ""
    if resume_id:
        return get_resume(resume_id).resume_text
    raise ValueError("Either resume_id or resume_text is required.")

