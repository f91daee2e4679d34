from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelInfo:
    id: str
    name: str
    provider: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "provider": self.provider}


AVAILABLE_MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(id="claude-3-7-sonnet", name="Claude 3.7 Sonnet", provider="Anthropic"),
    ModelInfo(id="gpt-4o", name="GPT-4o", provider="OpenAI"),
    ModelInfo(id="gpt-4o-mini", name="GPT-4o Mini", provider="OpenAI"),
    ModelInfo(id="gemini-2.0-flash", name="Gemini 2.0 Flash", provider="Google"),
    ModelInfo(id="mistral-large-latest", name="Mistral Large", provider="Mistral"),
)

DEFAULT_MODEL = "gpt-4o-mini"

_MODEL_IDS = {model.id for model in AVAILABLE_MODELS}


def resolve_model(model: str | None, fallback: str | None = None) -> str:
    """Return a catalog model id, defaulting to ``fallback`` or ``DEFAULT_MODEL``."""
    candidate = (model or "").strip() or (fallback or "").strip() or DEFAULT_MODEL
    if candidate not in _MODEL_IDS:
        raise ValueError(
            f"Unknown model '{candidate}'. Available: {', '.join(sorted(_MODEL_IDS))}."
        )
    return candidate
