from sqlalchemy.orm import Session
from app.models.profile import Profile
from typing import Optional


def get_profile(db: Session, user_id: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.id == user_id).first()


def get_profile_by_email(db: Session, email: str) -> Optional[Profile]:
    return db.query(Profile).filter(Profile.email == email).first()


def create_profile(db: Session, *, user_id: str, email: str, password_hash: str, full_name: Optional[str] = None) -> Profile:
    profile = Profile(id=user_id, email=email, password_hash=password_hash, full_name=full_name)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def update_profile(db: Session, profile: Profile, *, full_name: Optional[str] = None, avatar_url: Optional[str] = None) -> Profile:
    if full_name is not None:
        profile.full_name = full_name
    if avatar_url is not None:
        profile.avatar_url = avatar_url
    db.commit()
    db.refresh(profile)
    return profile
