"""
Portfolio Service

Two-phase persistence of a generated portfolio plus the read helpers used by
the portfolio endpoints.
"""

import logging
import re
import time
import unicodedata
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PersistenceError
from app.crud import crud_portfolio
from app.models.portfolio import Portfolio
from app.schemas.portfolio import PortfolioCode, SavedPortfolio
from app.tools.serializers import to_json_text

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Portfolio"
DEFAULT_TEMPLATE_ID = "default-template"

# category -> value stored when the category is absent from the input
STRUCTURED_CATEGORIES = {
    "personal_info": {},
    "professional_summary": "",
    "experience": [],
    "education": [],
    "skills": [],
    "projects": [],
    "certifications": [],
    "achievements": [],
    "languages": [],
}


def current_time_ms() -> int:
    return int(time.time() * 1000)


def personal_name(structured_data: Dict[str, Any]) -> Optional[str]:
    """Return personal_info.name when it is a non-blank string."""
    personal_info = structured_data.get("personal_info")
    if not isinstance(personal_info, dict):
        return None
    name = personal_info.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None


def derive_portfolio_title(structured_data: Dict[str, Any]) -> str:
    return personal_name(structured_data) or DEFAULT_TITLE


def slug_base(name: Optional[str]) -> str:
    """Lowercase the name and join its words with '-'; 'portfolio' when nothing usable remains."""
    if not name:
        return "portfolio"
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    base = re.sub(r"\s+", "-", ascii_name.strip().lower())
    base = re.sub(r"[^a-z0-9-]", "", base).strip("-")
    return base or "portfolio"


def build_portfolio_slug(name: Optional[str], timestamp_ms: int) -> str:
    return f"{slug_base(name)}-{timestamp_ms}"


def allocate_slug(db: Session, name: Optional[str], clock: Callable[[], int] = current_time_ms) -> str:
    """Build a slug that is not used yet; the timestamp part moves forward on collision."""
    timestamp_ms = clock()
    slug = build_portfolio_slug(name, timestamp_ms)
    while crud_portfolio.slug_exists(db, slug):
        timestamp_ms += 1
        slug = build_portfolio_slug(name, timestamp_ms)
    return slug


def default_metadata(structured_data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": personal_name(structured_data) or "My Portfolio",
        "description": "Portfolio generated by AI",
        "keywords": ["portfolio", "resume", "AI"],
    }


def default_customizations() -> Dict[str, Any]:
    return {
        "colors": {"primary": "#000000", "secondary": "#ffffff"},
        "layout": "default",
        "sections": ["about", "experience", "projects", "contact"],
    }


def build_portfolio_data_row(user_id: str, structured_data: Dict[str, Any]) -> Dict[str, Any]:
    row: Dict[str, Any] = {"user_id": user_id, "ai_enhanced": True}
    for category, default in STRUCTURED_CATEGORIES.items():
        row[category] = to_json_text(structured_data.get(category), default)
    return row


def build_portfolio_row(
    *,
    user_id: str,
    portfolio_data_id: str,
    slug: str,
    structured_data: Dict[str, Any],
    code: PortfolioCode,
) -> Dict[str, Any]:
    metadata = structured_data.get("metadata")
    customizations = structured_data.get("customizations")
    return {
        "user_id": user_id,
        "portfolio_data_id": portfolio_data_id,
        "title": derive_portfolio_title(structured_data),
        "slug": slug,
        "template_id": structured_data.get("template_id") or DEFAULT_TEMPLATE_ID,
        "html_content": code.html or "",
        "css_content": code.css or "",
        "js_content": code.js or "",
        "metadata_json": metadata if metadata is not None else default_metadata(structured_data),
        "customizations": customizations if customizations is not None else default_customizations(),
        "is_published": False,
        "view_count": 0,
    }


def save_generated_portfolio(
    db: Session,
    *,
    user_id: str,
    structured_data: Dict[str, Any],
    code: PortfolioCode,
    clock: Callable[[], int] = current_time_ms,
) -> SavedPortfolio:
    """Write the portfolio_data row, then the portfolios row that references it.

    Each phase commits on its own. A failure in the second phase leaves the
    first row in place.

    Raises:
        PersistenceError: when either insert fails.
    """
    try:
        portfolio_data = crud_portfolio.create_portfolio_data(db, build_portfolio_data_row(user_id, structured_data))
    except Exception as e:
        db.rollback()
        logger.error(f"Error saving structured portfolio_data for user {user_id}: {e}")
        raise PersistenceError(f"Failed to save portfolio data: {e}") from e

    try:
        slug = allocate_slug(db, personal_name(structured_data), clock)
        portfolio = crud_portfolio.create_portfolio(
            db,
            build_portfolio_row(
                user_id=user_id,
                portfolio_data_id=portfolio_data.id,
                slug=slug,
                structured_data=structured_data,
                code=code,
            ),
        )
    except Exception as e:
        db.rollback()
        logger.error(f"Error saving portfolio (portfolio_data {portfolio_data.id} kept): {e}")
        raise PersistenceError(f"Failed to save portfolio: {e}") from e

    logger.info(f"Portfolio saved with id: {portfolio.id}, slug: {portfolio.slug}")
    return SavedPortfolio(
        id=portfolio.id,
        slug=portfolio.slug,
        title=portfolio.title,
        portfolioDataId=portfolio_data.id,
    )


def get_owned_portfolio(db: Session, portfolio_id: str, user_id: str) -> Portfolio:
    portfolio = crud_portfolio.get_portfolio(db, portfolio_id)
    if portfolio is None or portfolio.user_id != user_id:
        raise NotFoundError("Portfolio not found")
    return portfolio


def open_published_portfolio(db: Session, slug: str) -> Portfolio:
    """Fetch a published portfolio by slug and count the view."""
    portfolio = crud_portfolio.get_portfolio_by_slug(db, slug)
    if portfolio is None or not portfolio.is_published:
        raise NotFoundError("Portfolio not found")
    return crud_portfolio.record_view(db, portfolio)
