from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException, status

from resume_coach.services.llm import ResumeAIError
from resume_coach.storage.repository import ResumeNotFoundError


def error_status(exc: Exception) -> int:
    if isinstance(exc, ResumeNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ResumeAIError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(exc, ValueError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def raise_http_error(exc: Exception) -> NoReturn:
    raise HTTPException(status_code=error_status(exc), detail=str(exc)) from exc
