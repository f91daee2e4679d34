from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import StreamingResponse

from resume_coach.ai.models import resolve_model
from resume_coach.api.errors import raise_http_error
from resume_coach.core.rate_limit import rate_limit
from resume_coach.schemas.chat import ChatEnhanceRequest, ChatHistoryResponse, QuickAction
from resume_coach.services.chat_service import chat_history_or_welcome, stream_chat_enhance
from resume_coach.services.llm import ai_enabled
from resume_coach.services.prompts import QUICK_ACTIONS
from resume_coach.storage.repository import ResumeNotFoundError, clear_chat_history, get_resume

router = APIRouter()


def _require_resume(resume_id: str) -> None:
    try:
        get_resume(resume_id)
    except ResumeNotFoundError as exc:
        raise_http_error(exc)


@router.post("/resumes/{resume_id}/chat/stream")
@rate_limit()
async def chat_stream(request: Request, resume_id: str, payload: ChatEnhanceRequest):
    _ = request
    _require_resume(resume_id)
    if payload.model:
        try:
            resolve_model(payload.model)
        except ValueError as exc:
            raise_http_error(exc)
    if payload.message.strip() and not ai_enabled():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI is disabled or OPENAI_API_KEY is not configured.",
        )

    gen = stream_chat_enhance(
        resume_id,
        payload.message,
        resume_text=payload.resume_text,
        model=payload.model,
    )

    return StreamingResponse(
        gen,
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.get("/resumes/{resume_id}/chat", response_model=ChatHistoryResponse)
async def chat_history(resume_id: str):
    _require_resume(resume_id)
    return ChatHistoryResponse(resume_id=resume_id, messages=chat_history_or_welcome(resume_id))


@router.delete("/resumes/{resume_id}/chat", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat_history(resume_id: str):
    _require_resume(resume_id)
    clear_chat_history(resume_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/chat/quick-actions", response_model=list[QuickAction])
async def quick_actions():
    return list(QUICK_ACTIONS)
