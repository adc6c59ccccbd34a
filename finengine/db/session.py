"""Database engine setup.

The engine itself never touches the database; only the payroll commit step
persists records. Test runs (ENV=test) use a shared in-memory SQLite database.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from finengine.core.config import settings

raw_url = settings.DATABASE_URL or "sqlite:///:memory:"

if raw_url.startswith("sqlite") and ":memory:" in raw_url:
    # Single shared connection so every session sees the same in-memory schema
    engine = create_engine(
        raw_url,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
elif raw_url.startswith("postgresql"):
    engine = create_engine(
        raw_url,
        future=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,
        pool_pre_ping=True,
    )
else:
    engine = create_engine(raw_url, future=True)
SessionLocal = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

