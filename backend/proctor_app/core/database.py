import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

from .config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    """Create an engine for ``database_url``.

    SQLite URLs get a single shared connection for in-memory databases and
    cross-thread access, everything else uses the default queue pool.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=settings.database_echo, **kwargs)

    return create_engine(
        database_url,
        pool_size=20,
        max_overflow=40,
        pool_pre_ping=settings.pool_pre_ping,
        pool_recycle=1800,
        pool_timeout=20,
        echo=settings.database_echo,
        connect_args={"connect_timeout": 10, "application_name": "proctoring_api"},
    )


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

Base = declarative_base()


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_db_and_tables(bind=None):
    # Import models so that they register on Base.metadata
    from .. import models  # noqa: F401

    Base.metadata.create_all(bind or engine, checkfirst=True)
    logger.info("Database tables created successfully")
