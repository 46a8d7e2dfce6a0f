from .portfolio import (
	PortfolioCode,
	GeneratePortfolioRequest,
	GeneratePortfolioResult,
	SavedPortfolio,
	PortfolioMetadata,
	PortfolioDetail,
	PortfolioSingleResponse,
	PublishRequest,
)
from .resume import ResumeSummary, ResumeSingleResponse, ResumeListResponse
from .auth import AuthUser, AuthSession, UserProfile, SignUpRequest, SignInRequest, ProfileUpdateRequest
from .dashboard import DashboardProfile, DashboardData, DashboardResponse
from .navigation import NavigationItem, NavigationMenu

__all__ = [
	"PortfolioCode",
	"GeneratePortfolioRequest",
	"GeneratePortfolioResult",
	"SavedPortfolio",
	"PortfolioMetadata",
	"PortfolioDetail",
	"PortfolioSingleResponse",
	"PublishRequest",
	"ResumeSummary",
	"ResumeSingleResponse",
	"ResumeListResponse",
	"AuthUser",
	"AuthSession",
	"UserProfile",
	"SignUpRequest",
	"SignInRequest",
	"ProfileUpdateRequest",
	"DashboardProfile",
	"DashboardData",
	"DashboardResponse",
	"NavigationItem",
	"NavigationMenu",
]
