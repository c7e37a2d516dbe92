"""API dependencies"""

from typing import Generator

from fastapi import Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """One session per request, closed once the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class Pagination:
    """Common ``page``/``limit`` query parameters."""

    def __init__(
        self,
        page: int = Query(1, ge=1, description="1-based page number"),
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Records per page"),
    ):
        self.page = page
        self.limit = limit
