from typing import Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_optional_user
from app.features.navigation import build_navigation, resolve_guard
from app.schemas.auth import AuthUser
from app.schemas.navigation import NavigationMenu

router = APIRouter()


@router.get("/", response_model=NavigationMenu)
def read_navigation(user: Optional[AuthUser] = Depends(get_optional_user)):
    return build_navigation(user)


@router.get("/guard")
def check_route(
    pathname: str,
    requireAuth: bool = True,
    redirectTo: str = "/auth/signin",
    user: Optional[AuthUser] = Depends(get_optional_user),
):
    """Tell the client whether `pathname` may render for the current caller or where to go instead."""
    decision = resolve_guard(user, loading=False, pathname=pathname, require_auth=requireAuth, redirect_to=redirectTo)
    return {"action": decision.action, "target": decision.target}
