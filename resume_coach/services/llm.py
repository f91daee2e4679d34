from __future__ import annotations

import json
import logging
import time
from functools import lru_cache
from typing import Any

from openai import OpenAI

from resume_coach.ai.config import load_ai_config
from resume_coach.ai.json_reply import parse_json_reply
from resume_coach.ai.models import resolve_model

logger = logging.getLogger(__name__)


class ResumeAIError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_exception"):
        super().__init__(message)
        self.code = code


def ai_enabled() -> bool:
    return load_ai_config().enabled


@lru_cache(maxsize=4)
def _client(api_key: str, base_url: str | None, timeout_s: float, max_retries: int) -> OpenAI:
    return OpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout_s,
        max_retries=max_retries,
    )


def _log_completion(*, task: str, model: str, status: str, started: float, prompt_len: int) -> None:
    logger.info(
        json.dumps(
            {
                "event": "llm_completion",
                "task": task,
                "model": model,
                "status": status,
                "prompt_len": prompt_len,
                "duration_ms": int((time.perf_counter() - started) * 1000),
            }
        )
    )


def complete_text(
    *,
    user_prompt: str,
    system_prompt: str | None = None,
    model: str | None = None,
    temperature: float = 0.7,
    max_output_tokens: int = 2000,
    task: str = "unknown",
) -> str:
    """Run a single non-streaming completion and return the reply text.

    Raises ``ResumeAIError`` with code ``llm_disabled`` when no key is
    configured, ``llm_exception`` when the call fails and ``llm_invalid`` when
    the model returns nothing.
    """
    cfg = load_ai_config()
    resolved_model = resolve_model(model, cfg.model)
    if not cfg.enabled:
        raise ResumeAIError("AI is disabled or OPENAI_API_KEY is not configured.", code="llm_disabled")

    messages: list[dict[str, str]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": user_prompt})

    started = time.perf_counter()
    try:
        response = _client(cfg.api_key, cfg.base_url, cfg.timeout_s, cfg.max_retries).chat.completions.create(
            model=resolved_model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_output_tokens,
        )
    except Exception as exc:  # noqa: BLE001 - surfaced as a typed error
        logger.warning("llm_completion_failed task=%s model=%s prompt_len=%s: %s", task, resolved_model, len(user_prompt), exc)
        _log_completion(task=task, model=resolved_model, status="error", started=started, prompt_len=len(user_prompt))
        raise ResumeAIError("The AI service request failed. Try again.", code="llm_exception") from exc

    content = response.choices[0].message.content if response.choices else ""
    if not content or not content.strip():
        _log_completion(task=task, model=resolved_model, status="empty", started=started, prompt_len=len(user_prompt))
        raise ResumeAIError("The AI service returned an empty response. Try again.", code="llm_invalid")

    _log_completion(task=task, model=resolved_model, status="success", started=started, prompt_len=len(user_prompt))
    return content.strip()


def complete_json(
    *,
    user_prompt: str,
    system_prompt: str | None = None,
    model: str | None = None,
    temperature: float = 0.2,
    max_output_tokens: int = 1500,
    task: str = "unknown",
) -> dict[str, Any] | None:
    """Like ``complete_text`` but returns the parsed JSON object, or None."""
    text = complete_text(
        user_prompt=user_prompt,
        system_prompt=system_prompt,
        model=model,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        task=task,
    )
    parsed = parse_json_reply(text)
    if parsed is None:
        logger.warning("llm_json_unparseable task=%s reply_len=%s", task, len(text))
    return parsed


def complete_json_required(**kwargs: Any) -> dict[str, Any]:
    payload = complete_json(**kwargs)
    if not payload:
        raise ResumeAIError("The AI service could not produce a valid response. Try again.", code="llm_invalid")
    return payload
