"""Database engine and request-scoped sessions"""

from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_gateway.config import settings

# Recycle pooled connections hourly so idle ones are not dropped by the server
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=10,
    max_overflow=10,
    pool_recycle=3600,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """One session per request; the endpoint owns commit/rollback"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
