from __future__ import annotations

import hashlib
import json
import logging
import re
import time
from dataclasses import dataclass
from typing import AsyncGenerator

from resume_coach.ai.factory import get_ai_client
from resume_coach.ai.types import ChatMessage
from resume_coach.core import events
from resume_coach.schemas.chat import ChatTurn
from resume_coach.services.prompts import COACH_SYSTEM_PROMPT, WELCOME_MESSAGE, chat_enhance_prompt
from resume_coach.storage.repository import append_chat_turns, get_resume, load_chat_history
from resume_coach.utils.sse import sse

logger = logging.getLogger("resume_coach.chat")

_EXPLANATION_RE = re.compile(r"EXPLANATION:\s*([\s\S]*?)(?=UPDATED_RESUME:|$)")
_UPDATED_RESUME_RE = re.compile(r"UPDATED_RESUME:\s*([\s\S]*)")


@dataclass(frozen=True)
class ChatReply:
    explanation: str
    updated_resume: str | None

    def to_dict(self) -> dict[str, str | None]:
        return {"explanation": self.explanation, "updated_resume": self.updated_resume}


def _short_hash(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


def _now_ms() -> int:
    return int(time.time() * 1000)


def parse_chat_reply(text: str) -> ChatReply:
    """Split a coach reply into its explanation and the rewritten resume, if any."""
    raw = (text or "").strip()
    updated = _UPDATED_RESUME_RE.search(raw)
    explanation = _EXPLANATION_RE.search(raw)

    updated_resume = updated.group(1).strip() if updated else None
    if explanation:
        explanation_text = explanation.group(1).strip()
    elif updated:
        explanation_text = raw[: updated.start()].strip()
    else:
        explanation_text = raw
    return ChatReply(explanation=explanation_text, updated_resume=updated_resume or None)


def chat_history_or_welcome(resume_id: str) -> list[ChatTurn]:
    history = load_chat_history(resume_id)
    if history:
        return history
    return [ChatTurn(role="assistant", content=WELCOME_MESSAGE, timestamp=_now_ms())]


def build_chat_messages(resume_text: str, history: list[ChatTurn], message: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=COACH_SYSTEM_PROMPT),
        ChatMessage(role="user", content=chat_enhance_prompt(resume_text, history, message)),
    ]


async def stream_chat_enhance(
    resume_id: str,
    message: str,
    *,
    resume_text: str | None = None,
    model: str | None = None,
) -> AsyncGenerator[str, None]:
    started_at = time.perf_counter()
    try:
        yield sse(events.TRACE, "Thinking...")

        user_message = (message or "").strip()
        if not user_message:
            yield sse(events.CHUNK, "Please type a message.")
            yield sse(events.DONE, "[DONE]")
            return

        content = resume_text if (resume_text or "").strip() else get_resume(resume_id).resume_text
        history = load_chat_history(resume_id)
        messages = build_chat_messages(content, history, user_message)

        logger.info(
            json.dumps(
                {
                    "event": "chat_request",
                    "resume_hash": _short_hash(resume_id),
                    "model": model,
                    "history_len": len(history),
                    "message_len": len(user_message),
                    "message_hash": _short_hash(user_message),
                }
            )
        )

        user_turn = ChatTurn(role="user", content=user_message, timestamp=_now_ms())

        ai = get_ai_client(model)
        assistant_text = ""
        async for token in ai.stream(messages):
            assistant_text += token
            yield sse(events.CHUNK, token)

        reply = parse_chat_reply(assistant_text)
        append_chat_turns(
            resume_id,
            user_turn,
            ChatTurn(role="assistant", content=assistant_text, timestamp=_now_ms()),
        )
        yield sse(events.RESULT, json.dumps(reply.to_dict(), ensure_ascii=False))
        yield sse(events.DONE, "[DONE]")

    except Exception as ex:
        logger.exception(
            json.dumps(
                {
                    "event": "chat_error",
                    "error": str(ex),
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                }
            )
        )
        yield sse(events.ERROR, str(ex))
        yield sse(events.DONE, "[DONE]")
    else:
        logger.info(
            json.dumps(
                {
                    "event": "chat_complete",
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                }
            )
        )
