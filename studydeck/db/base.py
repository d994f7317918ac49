from sqlmodel import SQLModel, create_engine

from studydeck.config.settings import get_settings

_engine = None


def get_engine():
    global _engine
    if _engine is None:
        url = get_settings().database_url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        _engine = create_engine(url, echo=False, connect_args=connect_args)
    return _engine


def init_db() -> None:
    """Create tables for subjects, items and progress."""
    # registers the table models on SQLModel.metadata
    from studydeck.db import schemas  # noqa: F401

    SQLModel.metadata.create_all(get_engine())
