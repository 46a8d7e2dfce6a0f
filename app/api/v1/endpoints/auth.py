from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_bearer_token, get_current_user, get_identity_backend
from app.core.errors import AuthError, ConflictError, NotFoundError
from app.schemas.auth import AuthSession, AuthUser, ProfileUpdateRequest, SignInRequest, SignUpRequest
from app.services.auth_service import IdentityBackend

router = APIRouter()


@router.post("/signup", response_model=AuthSession, status_code=status.HTTP_201_CREATED)
def sign_up(request: SignUpRequest, identity: IdentityBackend = Depends(get_identity_backend)):
    try:
        user = identity.register(request.email, request.password, request.full_name)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.detail)
    return AuthSession(access_token=identity.issue_token(user), user=user)


@router.post("/signin", response_model=AuthSession)
def sign_in(request: SignInRequest, identity: IdentityBackend = Depends(get_identity_backend)):
    try:
        user = identity.authenticate(request.email, request.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=e.detail, headers={"WWW-Authenticate": "Bearer"})
    return AuthSession(access_token=identity.issue_token(user), user=user)


@router.post("/signout")
def sign_out(token: str = Depends(get_bearer_token), identity: IdentityBackend = Depends(get_identity_backend)):
    try:
        identity.revoke_token(token)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=e.detail, headers={"WWW-Authenticate": "Bearer"})
    return {"status": 200, "message": "Signed out"}


@router.get("/me", response_model=AuthUser)
def read_me(current_user: AuthUser = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=AuthUser)
def update_me(
    request: ProfileUpdateRequest,
    current_user: AuthUser = Depends(get_current_user),
    identity: IdentityBackend = Depends(get_identity_backend),
):
    try:
        return identity.update_profile(current_user.id, full_name=request.full_name, avatar_url=request.avatar_url)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.detail)
