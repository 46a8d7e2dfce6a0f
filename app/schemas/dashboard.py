from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from app.schemas.portfolio import PortfolioDetail
from app.schemas.resume import ResumeSummary


class DashboardProfile(BaseModel):
    id: str
    email: str
    fullName: Optional[str] = None
    avatarUrl: Optional[str] = None
    subscriptionTier: str = "free"
    creditsRemaining: int = 0
    creditsPercent: float = 0.0
    createdAt: Optional[datetime] = None


class DashboardData(BaseModel):
    profile: Optional[DashboardProfile] = None
    resumes: List[ResumeSummary] = Field(default_factory=list)
    portfolios: List[PortfolioDetail] = Field(default_factory=list)


class DashboardResponse(BaseModel):
    status: int
    message: str
    data: DashboardData
