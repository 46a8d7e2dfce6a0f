from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class PortfolioCode(BaseModel):
    """Generated site content: one HTML document plus its stylesheet and script."""
    html: str = ""
    css: str = ""
    js: str = ""


class GeneratePortfolioRequest(BaseModel):
    # Untyped so every malformed input can be answered with the documented 400 body
    structuredData: Optional[Any] = None
    userId: Optional[Any] = None


class GeneratePortfolioResult(BaseModel):
    """Outcome of the generation workflow.

    `saved` is True only when both the portfolio_data row and the portfolio row
    were written. Fallback content and anonymous requests report `saved=False`
    without a `persistenceError`.
    """
    success: bool = True
    portfolio: PortfolioCode
    saved: bool = False
    portfolioId: Optional[str] = None
    slug: Optional[str] = None
    persistenceError: Optional[str] = None


class SavedPortfolio(BaseModel):
    id: str
    slug: str
    title: str
    portfolioDataId: str


class PortfolioMetadata(BaseModel):
    title: str = ""
    description: str = ""
    keywords: List[str] = Field(default_factory=list)


class PortfolioDetail(BaseModel):
    id: str
    userId: str
    portfolioDataId: str
    title: str
    slug: str
    templateId: str
    htmlContent: str
    cssContent: str
    jsContent: str
    metadata: Dict[str, Any]
    customizations: Dict[str, Any]
    isPublished: bool
    viewCount: int
    lastViewedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    viewUrl: str
    editUrl: str


class PortfolioSingleResponse(BaseModel):
    status: int
    message: str
    data: PortfolioDetail


class PublishRequest(BaseModel):
    isPublished: bool = True
