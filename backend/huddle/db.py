# backend/huddle/db.py

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .core.config import get_settings

logger = logging.getLogger(__name__)

DATABASE_URL = get_settings().DATABASE_URL
IS_SQLITE = DATABASE_URL.startswith("sqlite")

# one pooled engine per process; request threads share SQLite connections
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if IS_SQLITE else {},
    pool_pre_ping=not IS_SQLITE,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)


class Base(DeclarativeBase):
    """Declarative base shared by every Huddle table."""


def init_db() -> None:
    """
    Creates missing tables. Existing tables and their rows are left as they
    are; there is no migration step.
    """
    from . import models  # noqa: F401  # registers the tables on Base.metadata

    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables created or already exist: {', '.join(sorted(Base.metadata.tables))}")


def get_db():
    """
    Request-scoped session. Whatever a handler left uncommitted is rolled
    back when the request ends, successful or not.
    """
    session = SessionLocal()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
