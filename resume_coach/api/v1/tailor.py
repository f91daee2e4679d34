import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from resume_coach.ai.models import resolve_model
from resume_coach.api.errors import error_status, raise_http_error
from resume_coach.core import events
from resume_coach.core.rate_limit import rate_limit
from resume_coach.schemas.tailor import JobFitRequest, JobFitScore, TailoringResult, TailorRequest
from resume_coach.services.llm import ResumeAIError
from resume_coach.services.tailor_service import measure_job_fit, resolve_resume_text, tailor_resume
from resume_coach.storage.repository import ResumeNotFoundError, get_resume
from resume_coach.utils.sse import sse

logger = logging.getLogger(__name__)

router = APIRouter()

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _sse_json(event: str, payload: dict[str, Any]) -> str:
    return sse(event, json.dumps(payload, ensure_ascii=False))


def _precheck(payload: TailorRequest) -> None:
    try:
        if payload.model:
            resolve_model(payload.model)
        if payload.resume_id and not (payload.resume_text or "").strip():
            get_resume(payload.resume_id)
    except (ResumeNotFoundError, ValueError) as exc:
        raise_http_error(exc)


@router.post("/tailor", response_model=TailoringResult)
@rate_limit("10/minute")
async def tailor(request: Request, payload: TailorRequest):
    _ = request
    _precheck(payload)
    try:
        return await asyncio.to_thread(
            tailor_resume,
            payload.job,
            resume_id=payload.resume_id,
            resume_text=payload.resume_text,
            model=payload.model,
        )
    except (ResumeNotFoundError, ResumeAIError, ValueError) as exc:
        raise_http_error(exc)


@router.post("/tailor/stream")
@rate_limit("10/minute")
async def tailor_stream(request: Request, payload: TailorRequest):
    _precheck(payload)

    async def event_stream():
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

        def push_progress(event: dict[str, Any]) -> None:
            loop.call_soon_threadsafe(queue.put_nowait, {"kind": "progress", "payload": event})

        def worker() -> None:
            try:
                result = tailor_resume(
                    payload.job,
                    resume_id=payload.resume_id,
                    resume_text=payload.resume_text,
                    model=payload.model,
                    progress_callback=push_progress,
                )
                loop.call_soon_threadsafe(
                    queue.put_nowait,
                    {"kind": "result", "payload": result.model_dump(mode="json", by_alias=True)},
                )
            except Exception as exc:  # surfaced to the client as an error event
                logger.exception("tailor_stream_failed")
                loop.call_soon_threadsafe(
                    queue.put_nowait,
                    {"kind": "error", "payload": {"message": str(exc), "status": error_status(exc)}},
                )
            finally:
                loop.call_soon_threadsafe(queue.put_nowait, {"kind": "done", "payload": {}})

        task = asyncio.create_task(asyncio.to_thread(worker))

        try:
            yield _sse_json(events.CONNECTED, {"ok": True})
            while True:
                if await request.is_disconnected():
                    break
                event = await queue.get()
                kind = event.get("kind")
                payload_data = event.get("payload", {})
                if kind == "progress":
                    yield _sse_json(events.PROGRESS, payload_data)
                    continue
                if kind == "result":
                    yield _sse_json(events.RESULT, payload_data)
                    continue
                if kind == "error":
                    yield _sse_json(events.ERROR, payload_data)
                    continue
                if kind == "done":
                    yield _sse_json(events.DONE, {})
                    break
        finally:
            if not task.done():
                task.cancel()

    return StreamingResponse(event_stream(), media_type="text/event-stream", headers=SSE_HEADERS)


@router.post("/job-fit", response_model=JobFitScore)
@rate_limit("20/minute")
async def job_fit(request: Request, payload: JobFitRequest):
    _ = request
    try:
        text = resolve_resume_text(payload.resume_id, payload.resume_text)
        return await asyncio.to_thread(measure_job_fit, text, payload.job, model=payload.model)
    except (ResumeNotFoundError, ResumeAIError, ValueError) as exc:
        raise_http_error(exc)
