from pydantic import BaseModel, Field
from typing import Optional


class UserProfile(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    subscription_tier: str = "free"
    credits_remaining: int = 100


class AuthUser(BaseModel):
    id: str
    email: str
    profile: UserProfile = Field(default_factory=UserProfile)


class AuthSession(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AuthUser


class SignUpRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None


class SignInRequest(BaseModel):
    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
