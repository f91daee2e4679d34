import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from resume_coach import __version__
from resume_coach.api.v1.health import router as health_router
from resume_coach.api.v1.models import router as models_router
from resume_coach.api.v1.resumes import router as resumes_router
from resume_coach.api.v1.tailor import router as tailor_router
from resume_coach.api.v1.chat import router as chat_router
from resume_coach.api.v1.export import router as export_router
from resume_coach.core.rate_limit import limiter
from resume_coach.core.config import settings
from resume_coach.core.security import require_api_key
from dotenv import load_dotenv
from resume_coach.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Resume Coach API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_origin_regex=settings.cors_allow_origin_regex,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

_protected = [Depends(require_api_key)]

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(models_router, prefix="/v1", tags=["Models"])
app.include_router(resumes_router, prefix="/v1", tags=["Resumes"], dependencies=_protected)
app.include_router(tailor_router, prefix="/v1", tags=["Tailoring"], dependencies=_protected)
app.include_router(chat_router, prefix="/v1", tags=["Chat"], dependencies=_protected)
app.include_router(export_router, prefix="/v1", tags=["Export"], dependencies=_protected)
