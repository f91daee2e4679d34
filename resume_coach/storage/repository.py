from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import datetime, timezone

from pydantic import ValidationError

from resume_coach.core.config import settings
from resume_coach.schemas.chat import ChatTurn
from resume_coach.schemas.resumes import ResumeRecord, ResumeSummary
from resume_coach.schemas.tailor import JobInfo, TailoringResult
from resume_coach.storage.kv_store import kv_delete, kv_get, kv_list, kv_set

logger = logging.getLogger(__name__)

RESUME_PREFIX = "resume:"
TAILORED_PREFIX = "tailored:"
CHAT_PREFIX = "chat:"


class ResumeNotFoundError(LookupError):
    def __init__(self, resume_id: str):
        super().__init__(f"Resume '{resume_id}' was not found.")
        self.resume_id = resume_id


def new_resume_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _resume_key(resume_id: str) -> str:
    return f"{RESUME_PREFIX}{resume_id}"


def _chat_key(resume_id: str) -> str:
    return f"{CHAT_PREFIX}{resume_id}"


def create_resume(
    resume_text: str,
    *,
    filename: str = "",
    company_name: str = "",
    job_title: str = "",
    job_description: str = "",
    original_resume_id: str | None = None,
    is_enhanced: bool = False,
    is_generated: bool = False,
    parsing_warnings: list[str] | None = None,
) -> ResumeRecord:
    record = ResumeRecord(
        id=new_resume_id(),
        filename=filename,
        company_name=company_name,
        job_title=job_title,
        job_description=job_description,
        resume_text=resume_text,
        original_resume_id=original_resume_id,
        is_enhanced=is_enhanced,
        is_generated=is_generated,
        parsing_warnings=list(parsing_warnings or []),
        created_at=_now(),
    )
    save_resume(record)
    return record


def save_resume(record: ResumeRecord) -> ResumeRecord:
    kv_set(_resume_key(record.id), record.model_dump_json(by_alias=True))
    return record


def get_resume(resume_id: str) -> ResumeRecord:
    raw = kv_get(_resume_key(resume_id))
    if raw is None:
        raise ResumeNotFoundError(resume_id)
    return ResumeRecord.model_validate_json(raw)


def list_resumes() -> list[ResumeSummary]:
    summaries: list[ResumeSummary] = []
    for key in kv_list(f"{RESUME_PREFIX}*"):
        raw = kv_get(key)
        if raw is None:
            continue
        try:
            record = ResumeRecord.model_validate_json(raw)
        except ValidationError:
            logger.warning("resume_record_invalid key=%s", key)
            continue
        summaries.append(
            ResumeSummary(
                id=record.id,
                filename=record.filename,
                company_name=record.company_name,
                job_title=record.job_title,
                overall_score=record.feedback.overall_score if record.feedback else None,
                is_enhanced=record.is_enhanced,
                is_generated=record.is_generated,
                created_at=record.created_at,
            )
        )
    summaries.sort(key=lambda item: item.created_at, reverse=True)
    return summaries


def delete_resume(resume_id: str) -> None:
    if not kv_delete(_resume_key(resume_id)):
        raise ResumeNotFoundError(resume_id)
    kv_delete(_chat_key(resume_id))
    for key in kv_list(f"{TAILORED_PREFIX}{resume_id}:*"):
        kv_delete(key)


def save_tailored_result(resume_id: str, job: JobInfo, result: TailoringResult) -> str:
    key = f"{TAILORED_PREFIX}{resume_id}:{int(time.time() * 1000)}"
    payload = {
        "resume_id": resume_id,
        "job": job.model_dump(),
        "result": result.model_dump(mode="json", by_alias=True),
        "created_at": _now().isoformat(),
    }
    kv_set(key, json.dumps(payload, ensure_ascii=False))
    return key


def list_tailored_results(resume_id: str) -> list[dict]:
    results: list[dict] = []
    for key in kv_list(f"{TAILORED_PREFIX}{resume_id}:*"):
        raw = kv_get(key)
        if raw is None:
            continue
        try:
            results.append(json.loads(raw))
        except ValueError:
            logger.warning("tailored_record_invalid key=%s", key)
    return results


def load_chat_history(resume_id: str) -> list[ChatTurn]:
    raw = kv_get(_chat_key(resume_id))
    if not raw:
        return []
    try:
        items = json.loads(raw)
    except ValueError:
        logger.warning("chat_history_invalid resume_id=%s", resume_id)
        return []
    if not isinstance(items, list):
        return []

    turns: list[ChatTurn] = []
    for item in items:
        try:
            turns.append(ChatTurn.model_validate(item))
        except ValidationError:
            continue
    return turns


def save_chat_history(resume_id: str, turns: list[ChatTurn]) -> list[ChatTurn]:
    limit = max(1, settings.chat_history_limit)
    kept = list(turns)[-limit:]
    kv_set(
        _chat_key(resume_id),
        json.dumps([turn.model_dump() for turn in kept], ensure_ascii=False),
    )
    return kept


def append_chat_turns(resume_id: str, *turns: ChatTurn) -> list[ChatTurn]:
    history = load_chat_history(resume_id)
    history.extend(turns)
    return save_chat_history(resume_id, history)


def clear_chat_history(resume_id: str) -> bool:
    return kv_delete(_chat_key(resume_id))
