import random
from collections.abc import Callable, Generator
from datetime import datetime, timezone

from fastapi import HTTPException, Request, status
from sqlmodel import Session

from studydeck.config.settings import get_settings
from studydeck.db.base import get_engine
from studydeck.study.scheduler import default_rng


def get_session() -> Generator[Session, None, None]:
    """Provide a database session for request scope."""
    engine = get_engine()
    with Session(engine) as session:
        yield session


def get_current_user_id(request: Request) -> str:
    """Identity is established upstream and forwarded in a header."""
    header = get_settings().user_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user_id


def get_rng() -> random.Random:
    return default_rng


def get_clock() -> Callable[[], datetime]:
    return lambda: datetime.now(timezone.utc)
