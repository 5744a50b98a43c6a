from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from movierec.core.config import get_settings

Base = declarative_base()

_engine: Optional[Engine] = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def get_engine() -> Engine:
    """Create the engine from DATABASE_URL on first use"""
    global _engine
    if _engine is None:
        url = get_settings().DATABASE_URL
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        _engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
        SessionLocal.configure(bind=_engine)
    return _engine


def get_db():
    """Dependency to get database session"""
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
