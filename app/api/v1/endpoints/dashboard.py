from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.db.session import get_session_factory
from app.schemas.auth import AuthUser
from app.schemas.dashboard import DashboardResponse
from app.services.dashboard_service import load_dashboard

router = APIRouter()


@router.get("/", response_model=DashboardResponse)
async def read_dashboard(
    current_user: AuthUser = Depends(get_current_user),
    session_factory=Depends(get_session_factory),
):
    """Profile, resumes and portfolios of the signed-in user, newest first."""
    data = await load_dashboard(current_user.id, session_factory=session_factory)
    return DashboardResponse(status=200, message="Dashboard returned successfully", data=data)
