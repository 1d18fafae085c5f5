import os
import logging
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session
from learnhub_backend.settings import settings

logger = logging.getLogger(__name__)

SERVER_POOL_OPTIONS = {
    "pool_pre_ping": True,
    "pool_size": 10,
    "max_overflow": 5,
    "pool_timeout": 30,
    "pool_recycle": 300,
}


def database_url() -> str:
    """DATABASE_URL wins; otherwise a PostgreSQL url is assembled from POSTGRES_* variables."""
    if settings.DATABASE_URL:
        return settings.DATABASE_URL

    user = os.environ.get("POSTGRES_USER")
    password = os.environ.get("POSTGRES_PASSWORD")
    host = os.environ.get("POSTGRES_URL")
    name = os.environ.get("POSTGRES_DB")
    return f"postgresql://{user}:{password}@{host}/{name}"


def engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return dict(SERVER_POOL_OPTIONS)


_url = database_url()
_engine = create_engine(_url, **engine_options(_url))
_SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_engine():
    return _engine


def get_db() -> Generator[Session, None, None]:
    db = _SessionLocal()
    try:
        yield db
    except OperationalError as e:
        logger.error(f"Database connection failed for {_engine.url.render_as_string(hide_password=True)}: {e}")
        db.rollback()
        raise
    finally:
        db.close()
