from fastapi import APIRouter

from resume_coach.ai.config import load_ai_config

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "ai_enabled": load_ai_config().enabled}
