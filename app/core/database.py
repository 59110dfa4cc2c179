import re
from typing import Any, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Result
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,  # Connection pool size
    max_overflow=20  # Allow up to 20 connections beyond pool_size
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """
    Execute a statement written with positional ``$n`` placeholders.

    ``$n`` is bound to ``values[n - 1]``. The placeholders are rewritten to
    named SQLAlchemy binds so the same statement runs on any dialect.

    Args:
        db: Database session
        sql: Statement text
        values: Bound values in placeholder order

    Returns:
        SQLAlchemy Result
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return db.execute(text(_POSITIONAL_PARAM.sub(r":p\1", sql)), params)


def init_db(bind=None):
    """
    Initialize database.

    Imports the models so they register on Base, then creates any missing
    tables (companies, jobs, users).
    """
    from app.models import company, job, user  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
