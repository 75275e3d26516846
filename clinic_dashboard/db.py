"""
db.py
=====
Handles database connection and session management for the clinic dashboard.
"""

import math
import os
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from .config import settings

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    """SQLite needs its directory created and the thread check disabled."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True}

    db_path = parsed.database
    if db_path and db_path != ":memory:":
        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir, exist_ok=True)
    return {"connect_args": {"check_same_thread": False}}


engine = create_engine(SQLALCHEMY_DATABASE_URL, **_engine_kwargs(SQLALCHEMY_DATABASE_URL))

# Create a configured session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency injection generator.
    Yields a database session, closes when done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(Base):
    """
    Initializes the database, creating tables if missing.
    Called once on FastAPI startup.
    """
    Base.metadata.create_all(bind=engine)


def paginate(query, page: int, limit: int):
    """
    Apply offset/limit to a query.
    Returns (items, pagination) where pagination is {total, page, pages}.
    """
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    pagination = {
        "total": total,
        "page": page,
        "pages": math.ceil(total / limit) if limit else 0,
    }
    return items, pagination
