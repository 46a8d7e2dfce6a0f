from typing import Any, Callable, Dict, List, Optional
import asyncio
import logging

from sqlalchemy.orm import Session

from app.crud import crud_portfolio, crud_profile, crud_resume
from app.db.session import SessionLocal
from app.schemas.dashboard import DashboardData
from app.services.resume_normalization import (
    normalize_portfolio_row,
    normalize_profile_row,
    normalize_resume_row,
)

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


def _with_session(session_factory: SessionFactory, fn: Callable[[Session], Any]) -> Any:
    """Run one read in its own session; sessions are not shared across threads."""
    db = session_factory()
    try:
        return fn(db)
    finally:
        db.close()


def read_profile_sync(session_factory: SessionFactory, user_id: str) -> Optional[Dict[str, Any]]:
    def _read(db: Session):
        profile = crud_profile.get_profile(db, user_id)
        return normalize_profile_row(profile) if profile else None

    return _with_session(session_factory, _read)


def read_resumes_sync(session_factory: SessionFactory, user_id: str) -> List[Dict[str, Any]]:
    return _with_session(
        session_factory,
        lambda db: [normalize_resume_row(r, user_id) for r in crud_resume.get_resumes_for_user(db, user_id)],
    )


def read_portfolios_sync(session_factory: SessionFactory, user_id: str) -> List[Dict[str, Any]]:
    return _with_session(
        session_factory,
        lambda db: [normalize_portfolio_row(p, user_id) for p in crud_portfolio.get_portfolios_for_user(db, user_id)],
    )


async def load_dashboard(user_id: str, session_factory: SessionFactory = SessionLocal) -> DashboardData:
    """Read profile, resumes and portfolios concurrently.

    The three reads are independent. One failing is logged and replaced by an
    empty value so the other two still reach the caller.
    """
    profile, resumes, portfolios = await asyncio.gather(
        asyncio.to_thread(read_profile_sync, session_factory, user_id),
        asyncio.to_thread(read_resumes_sync, session_factory, user_id),
        asyncio.to_thread(read_portfolios_sync, session_factory, user_id),
        return_exceptions=True,
    )

    if isinstance(profile, BaseException):
        logger.error(f"Error fetching profile for {user_id}: {profile}")
        profile = None
    if isinstance(resumes, BaseException):
        logger.error(f"Error fetching resumes for {user_id}: {resumes}")
        resumes = []
    if isinstance(portfolios, BaseException):
        logger.error(f"Error fetching portfolios for {user_id}: {portfolios}")
        portfolios = []

    return DashboardData.model_validate({
        "profile": profile,
        "resumes": resumes,
        "portfolios": portfolios,
    })
