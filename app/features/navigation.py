"""Navigation menu and route-guard decisions."""
from dataclasses import dataclass
from typing import List, Optional

from app.schemas.auth import AuthUser
from app.schemas.navigation import NavigationItem, NavigationMenu

SIGN_IN_PATH = "/auth/signin"
DASHBOARD_PATH = "/dashboard"
UPLOAD_PATH = "/upload"

NAVIGATION: List[NavigationItem] = [
    NavigationItem(name="Features", href="/#features"),
    NavigationItem(name="Templates", href="/templates"),
    NavigationItem(name="Dashboard", href=DASHBOARD_PATH),
    NavigationItem(name="Generate", href=UPLOAD_PATH),
    NavigationItem(name="Examples", href="/#examples"),
]

USER_MENU: List[NavigationItem] = [
    NavigationItem(name="Dashboard", href=DASHBOARD_PATH),
    NavigationItem(name="Generate", href=UPLOAD_PATH),
    NavigationItem(name="Sign Out", href="/auth/signout"),
]

# GuardDecision.action values
RENDER = "render"
REDIRECT = "redirect"
LOADING = "loading"


@dataclass(frozen=True)
class GuardDecision:
    action: str
    target: Optional[str] = None


def display_name(user: Optional[AuthUser]) -> Optional[str]:
    """Profile full name, else the local part of the email."""
    if user is None:
        return None
    if user.profile and user.profile.full_name:
        return user.profile.full_name
    return user.email.split("@")[0] if user.email else None


def get_started_target(user: Optional[AuthUser]) -> str:
    return UPLOAD_PATH if user else SIGN_IN_PATH


def resolve_guard(
    user: Optional[AuthUser],
    loading: bool,
    pathname: str,
    require_auth: bool = True,
    redirect_to: str = SIGN_IN_PATH,
) -> GuardDecision:
    if loading:
        return GuardDecision(LOADING)
    if require_auth and user is None:
        return GuardDecision(REDIRECT, redirect_to)
    # signed-in users have no business on the auth pages
    if not require_auth and user is not None and pathname.startswith("/auth"):
        return GuardDecision(REDIRECT, DASHBOARD_PATH)
    return GuardDecision(RENDER)


def build_navigation(user: Optional[AuthUser]) -> NavigationMenu:
    return NavigationMenu(
        items=list(NAVIGATION),
        signedIn=user is not None,
        displayName=display_name(user),
        getStartedHref=get_started_target(user),
        userMenu=list(USER_MENU) if user else [],
    )
