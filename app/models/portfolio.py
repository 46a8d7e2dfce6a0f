from sqlalchemy import Column, String, DateTime, JSON, Integer, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base
from datetime import datetime
import uuid


def generate_uuid():
    return str(uuid.uuid4())


class PortfolioData(Base):
    """Serialized copy of the structured resume data a portfolio was generated from."""
    __tablename__ = "portfolio_data"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, index=True, nullable=False)
    # Each category is stored as JSON text, exactly as it was sent for generation
    personal_info = Column(Text, default="{}")
    professional_summary = Column(Text, default='""')
    experience = Column(Text, default="[]")
    education = Column(Text, default="[]")
    skills = Column(Text, default="[]")
    projects = Column(Text, default="[]")
    certifications = Column(Text, default="[]")
    achievements = Column(Text, default="[]")
    languages = Column(Text, default="[]")
    ai_enhanced = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    portfolios = relationship("Portfolio", back_populates="portfolio_data")


class Portfolio(Base):
    __tablename__ = "portfolios"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, index=True, nullable=False)
    portfolio_data_id = Column(
        String,
        ForeignKey("portfolio_data.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    title = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    template_id = Column(String, default="default-template")
    html_content = Column(Text, nullable=False, default="")
    css_content = Column(Text, nullable=False, default="")
    js_content = Column(Text, nullable=False, default="")
    # "metadata" is reserved on declarative classes
    metadata_json = Column("metadata", JSON, nullable=True)
    customizations = Column(JSON, nullable=True)
    is_published = Column(Boolean, default=False)
    view_count = Column(Integer, default=0)
    last_viewed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    portfolio_data = relationship("PortfolioData", back_populates="portfolios")
