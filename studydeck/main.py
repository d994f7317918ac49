from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from dotenv import load_dotenv
from fastapi import FastAPI

from studydeck.api.routes import api_router
from studydeck.config.settings import get_settings
from studydeck.db.base import init_db
from studydeck.logging import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    load_dotenv()
    configure_logging()
    init_db()
    logger.info("app.started", app_name=get_settings().app_name)
    yield


app = FastAPI(title="StudyDeck", lifespan=lifespan)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Basic health endpoint."""
    return {"status": "ok"}


app.include_router(api_router)
