import os
from dataclasses import dataclass

from resume_coach.ai.models import DEFAULT_MODEL


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


@dataclass(frozen=True)
class AIConfig:
    model: str
    enabled: bool
    api_key: str
    base_url: str | None
    timeout_s: float
    max_retries: int


def load_ai_config() -> AIConfig:
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    enabled = _env_bool("AI_ENABLED", True) and bool(api_key) and not _looks_like_placeholder(api_key)
    return AIConfig(
        model=(os.getenv("AI_MODEL") or DEFAULT_MODEL).strip(),
        enabled=enabled,
        api_key=api_key,
        base_url=(os.getenv("OPENAI_BASE_URL") or "").strip() or None,
        timeout_s=float(os.getenv("OPENAI_TIMEOUT_S", "60")),
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
    )
