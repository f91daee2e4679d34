from resume_coach.ai.config import load_ai_config
from resume_coach.ai.models import resolve_model
from resume_coach.ai.types import AIClient

from resume_coach.ai.providers.openai_provider import OpenAIProvider


def get_ai_client(model: str | None = None) -> AIClient:
    cfg = load_ai_config()
    if not cfg.enabled:
        raise RuntimeError("AI is disabled or OPENAI_API_KEY is not configured.")

    return OpenAIProvider(
        model=resolve_model(model, cfg.model),
        api_key=cfg.api_key,
        base_url=cfg.base_url,
        timeout_s=cfg.timeout_s,
        max_retries=cfg.max_retries,
    )
