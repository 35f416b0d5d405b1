from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from template_builder.config import settings

_connect_args = {}
if settings.database_url_fixed.startswith("sqlite"):
    _connect_args = {"check_same_thread": False}

engine = create_engine(settings.database_url_fixed, connect_args=_connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session for the duration of a request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables for all models registered on Base"""
    import template_builder.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
