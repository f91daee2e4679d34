from fastapi import APIRouter

from resume_coach.ai.config import load_ai_config
from resume_coach.ai.models import AVAILABLE_MODELS

router = APIRouter()


@router.get("/models", summary="List the AI models a request may select.")
async def list_models():
    return {
        "default": load_ai_config().model,
        "models": [model.to_dict() for model in AVAILABLE_MODELS],
    }
