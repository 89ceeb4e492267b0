from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import settings


def normalize_database_url(url: str) -> str:
    # Some hosts hand out postgres:// URLs, but SQLAlchemy needs postgresql://
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


database_url = normalize_database_url(settings.database_url)
engine = create_engine(database_url, **engine_options(database_url))

# Repositories hand detached rows back to the engine, so keep attributes loaded
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

Base = declarative_base()


def create_tables():
    """Create missing tables; schema changes go through alembic"""
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
