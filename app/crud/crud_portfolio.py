from sqlalchemy.orm import Session
from app.models.portfolio import Portfolio, PortfolioData
from typing import Any, Dict, List, Optional
from datetime import datetime


def create_portfolio_data(db: Session, data: Dict[str, Any]) -> PortfolioData:
    """Insert and commit a portfolio_data row; the returned instance carries its id."""
    row = PortfolioData(**data)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_portfolio(db: Session, data: Dict[str, Any]) -> Portfolio:
    row = Portfolio(**data)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def slug_exists(db: Session, slug: str) -> bool:
    return db.query(Portfolio.id).filter(Portfolio.slug == slug).first() is not None


def get_portfolio(db: Session, portfolio_id: str) -> Optional[Portfolio]:
    return db.query(Portfolio).filter(Portfolio.id == portfolio_id).first()


def get_portfolio_by_slug(db: Session, slug: str) -> Optional[Portfolio]:
    return db.query(Portfolio).filter(Portfolio.slug == slug).first()


def get_portfolios_for_user(db: Session, user_id: str) -> List[Portfolio]:
    return (
        db.query(Portfolio)
        .filter(Portfolio.user_id == user_id)
        .order_by(Portfolio.created_at.desc())
        .all()
    )


def set_published(db: Session, portfolio: Portfolio, is_published: bool) -> Portfolio:
    portfolio.is_published = is_published
    db.commit()
    db.refresh(portfolio)
    return portfolio


def record_view(db: Session, portfolio: Portfolio) -> Portfolio:
    portfolio.view_count = (portfolio.view_count or 0) + 1
    portfolio.last_viewed_at = datetime.utcnow()
    db.commit()
    db.refresh(portfolio)
    return portfolio
