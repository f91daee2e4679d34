from contextlib import asynccontextmanager
import logging

from resume_coach.core.layout_config import get_layout_config
from resume_coach.storage.kv_store import close_store, init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    init_store()
    get_layout_config()
    logger.info("resume_coach_started")
    yield
    close_store()
